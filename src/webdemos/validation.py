"""
Rule-expression validator.

A rule expression is a comma separated list of named checks, e.g.
``"required,email"`` or ``"omitempty,min=3,max=16"``. Each check is a small
predicate evaluated in order against one value; every failure is collected
instead of stopping at the first one.

Features:
- Declarative registry of named predicate checks
- Parameterised rules (``tag=param``)
- All violations reported, each naming its rule and failing value
- Console demo printing one line per violation
"""

import logging
import sys
from typing import Any, Callable, Dict, List, Optional

from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel, Field

from .errors import RuleSyntaxError, ValidationErrors

logger = logging.getLogger(__name__)


class Rule(BaseModel):
    """A single named check parsed from a rule expression."""
    tag: str = Field(..., description="Rule name, e.g. 'required'")
    param: Optional[str] = Field(None, description="Rule parameter after '='")


class FieldError(BaseModel):
    """One violated rule for one validated value."""
    tag: str = Field(..., description="Name of the failing rule")
    param: Optional[str] = Field(None, description="Parameter of the failing rule")
    value: Any = Field(None, description="The value that failed")
    field: str = Field("", description="Field name; empty for a bare variable")

    def error(self) -> str:
        """Human readable description of the violation."""
        tag = f"{self.tag}={self.param}" if self.param is not None else self.tag
        return (
            f"Key: '{self.field}' Error:Field validation for '{self.field}' "
            f"failed on the '{tag}' tag (value: {self.value!r})"
        )


def _is_empty(value: Any) -> bool:
    return value is None or (hasattr(value, "__len__") and len(value) == 0)


def _check_required(value: Any, param: Optional[str]) -> bool:
    return not _is_empty(value)


def _check_email(value: Any, param: Optional[str]) -> bool:
    try:
        validate_email(str(value), check_deliverability=False)
    except EmailNotValidError as e:
        logger.debug(f"Email syntax check failed for {value!r}: {e}")
        return False
    return True


def _measure(value: Any) -> float:
    # numbers compare by value, everything else by length
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value
    return len(value)


def _check_min(value: Any, param: Optional[str]) -> bool:
    return _measure(value) >= int(param)


def _check_max(value: Any, param: Optional[str]) -> bool:
    return _measure(value) <= int(param)


def _check_len(value: Any, param: Optional[str]) -> bool:
    return _measure(value) == int(param)


def _check_oneof(value: Any, param: Optional[str]) -> bool:
    return str(value) in param.split()


# tag -> predicate; format checks only run on non-empty values
RULES: Dict[str, Callable[[Any, Optional[str]], bool]] = {
    "required": _check_required,
    "email": _check_email,
    "min": _check_min,
    "max": _check_max,
    "len": _check_len,
    "oneof": _check_oneof,
}

PRESENCE_RULES = {"required"}
INT_PARAM_RULES = {"min", "max", "len"}
PARAM_RULES = INT_PARAM_RULES | {"oneof"}
OMITEMPTY = "omitempty"


def parse_rules(expression: str) -> List[Rule]:
    """
    Parse a comma separated rule expression.

    Args:
        expression: Rule expression such as ``"required,email"``

    Returns:
        The rules in evaluation order

    Raises:
        RuleSyntaxError: On empty segments, unknown tags or bad parameters
    """
    if not expression or not expression.strip():
        raise RuleSyntaxError("Rule expression cannot be empty")

    rules = []
    for segment in expression.split(","):
        segment = segment.strip()
        if not segment:
            raise RuleSyntaxError(f"Empty rule in expression {expression!r}")

        tag, sep, param = segment.partition("=")
        param = param if sep else None

        if tag != OMITEMPTY and tag not in RULES:
            raise RuleSyntaxError(f"Undefined validation rule '{tag}'")
        if tag in PARAM_RULES and not param:
            raise RuleSyntaxError(f"Rule '{tag}' requires a parameter")
        if tag not in PARAM_RULES and param is not None:
            raise RuleSyntaxError(f"Rule '{tag}' does not take a parameter")
        if tag in INT_PARAM_RULES:
            try:
                int(param)
            except ValueError:
                raise RuleSyntaxError(f"Rule '{tag}' expects an integer, got {param!r}") from None

        rules.append(Rule(tag=tag, param=param))
    return rules


def validate_var(value: Any, expression: str, field: str = "") -> None:
    """
    Validate a single value against a rule expression.

    Every rule is evaluated; failures are collected rather than
    short-circuited.

    Raises:
        ValidationErrors: When at least one rule failed
        RuleSyntaxError: When the expression is malformed
    """
    errors = []
    empty = _is_empty(value)

    for rule in parse_rules(expression):
        if rule.tag == OMITEMPTY:
            if empty:
                break
            continue
        if empty and rule.tag not in PRESENCE_RULES:
            continue
        if not RULES[rule.tag](value, rule.param):
            errors.append(FieldError(tag=rule.tag, param=rule.param, value=value, field=field))

    if errors:
        raise ValidationErrors(errors)


def run_validation_demo(value: str, expression: str = "required,email", out=None) -> int:
    """
    Validate one value and print the outcome.

    Prints ``Validation passed`` or one ``Error: <description>`` line per
    violated rule.

    Returns:
        Process exit status: 0 passed, 1 rule violations, 2 bad expression
    """
    out = out or sys.stdout
    try:
        validate_var(value, expression)
    except ValidationErrors as e:
        for field_error in e:
            print(f"Error: {field_error.error()}", file=out)
        return 1
    except RuleSyntaxError as e:
        logger.error(f"Invalid rule expression {expression!r}: {e}")
        print(f"Error: {e}", file=out)
        return 2

    print("Validation passed", file=out)
    return 0
