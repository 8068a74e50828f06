"""
Small builder for parameterized Postgres statements.

Each clause gets its own ``$n`` placeholder at the moment it is appended, so
placeholder numbers always follow the order the arguments were added in.
"""

from typing import Any, List


class QueryBuilder:
    def __init__(self, base: str):
        self.base = base
        self.conditions: List[str] = []
        self.args: List[Any] = []
        self.suffix: List[str] = []

    def param(self, value: Any) -> str:
        """Register ``value`` and return its placeholder."""
        self.args.append(value)
        return f"${len(self.args)}"

    def where(self, template: str, value: Any) -> "QueryBuilder":
        """Append a condition; ``{}`` in the template is replaced by the new placeholder."""
        self.conditions.append(template.format(self.param(value)))
        return self

    def where_contains(self, column: str, value: str) -> "QueryBuilder":
        """Case-insensitive substring filter on ``column``."""
        escaped = value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
        return self.where(f"{column} ILIKE {{}}", f"%{escaped}%")

    def order_by(self, clause: str) -> "QueryBuilder":
        self.suffix.append(f"ORDER BY {clause}")
        return self

    def limit(self, value: int) -> "QueryBuilder":
        self.suffix.append(f"LIMIT {self.param(value)}")
        return self

    def offset(self, value: int) -> "QueryBuilder":
        self.suffix.append(f"OFFSET {self.param(value)}")
        return self

    def build(self):
        sql = self.base
        if self.conditions:
            sql += " WHERE " + " AND ".join(self.conditions)
        if self.suffix:
            sql += " " + " ".join(self.suffix)
        return sql, list(self.args)
