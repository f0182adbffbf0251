"""Row-level CHECK constraints shared by the directory tables.

Length and range checks run on every backend. The email format checks use the
PostgreSQL regex operator and are only emitted there.
"""

from sqlalchemy import CheckConstraint

EMAIL_REGEX = r"^[^@]+@[^@]+\.[^@]+$"


def max_length(column: str, limit: int, name: str) -> CheckConstraint:
    return CheckConstraint(f"length({column}) <= {limit}", name=name)


def email_format(column: str, name: str, nullable: bool = True, sentinel: str | None = None) -> CheckConstraint:
    expr = f"{column} ~ '{EMAIL_REGEX}'"
    if sentinel is not None:
        expr = f"{column} = '{sentinel}' OR {expr}"
    if nullable:
        expr = f"{column} IS NULL OR {expr}"
    return CheckConstraint(expr, name=name).ddl_if(dialect="postgresql")
