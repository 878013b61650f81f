"""
dataModel.py

Data models used by the expansion engine and the command line tool.
The models leverage Pydantic for validation and type safety.

Features:
- Strict-mode restrictions applied during expansion
- Results of template processing in the CLI

Usage:
Import these models to validate and structure data used in the application.
"""

from pydantic import BaseModel, ConfigDict, Field


class Restrictions(BaseModel):
    """Strict-mode checks applied while expanding a template.

    Operators of the default family (`:-`, `=`, `:=`, `:?`, `:+`) are exempt,
    since they already decide what an unset or empty variable means.

    Attributes:
        no_unset: Raise when a referenced variable is unset
        no_empty: Raise when a referenced variable is set but empty
    """

    model_config = ConfigDict(frozen=True)

    no_unset: bool = Field(default=False, description="Fail on unset variables.")
    no_empty: bool = Field(default=False, description="Fail on empty variables.")


RELAXED: Restrictions = Restrictions()


class SubstResult(BaseModel):
    """Result of processing one template in the CLI.

    Attributes:
        text: The expanded text; empty on failure
        error: Error message if processing failed
        success: Whether processing succeeded
        exit_code: Process exit code to report
    """

    text: str
    error: str | None = None
    success: bool = True
    exit_code: int = 0
