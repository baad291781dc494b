from enum import Enum
from typing import List

from pydantic import BaseModel, Field, computed_field


class Severity(str, Enum):
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


class LintIssue(BaseModel):
    path: str
    rule: str
    severity: Severity
    message: str

    def __str__(self) -> str:
        return f"{self.path}: {self.severity.value} {self.rule}: {self.message}"


class LintReport(BaseModel):
    checked: int = 0
    issues: List[LintIssue] = Field(default_factory=list)

    @computed_field
    @property
    def errors(self) -> int:
        return sum(1 for issue in self.issues if issue.severity == Severity.ERROR)

    @computed_field
    @property
    def warnings(self) -> int:
        return sum(1 for issue in self.issues if issue.severity == Severity.WARNING)

    @computed_field
    @property
    def ok(self) -> bool:
        return self.errors == 0
