# ============================================================================
# ENVIRONMENT VARIABLE VALIDATION
# ============================================================================
# STATUS: Configuration - Startup validation with regex patterns
# PURPOSE: Validate env vars at startup to fail fast with clear error messages
# ============================================================================
"""
Environment Variable Validation Module.

Validates environment variables at startup using regex patterns to catch
configuration errors EARLY with clear, actionable error messages.

Run by startup.run_startup_validation() when function_app.py loads.
If any rule fails, the Service Bus triggers are not registered.

Usage:
    from config.env_validation import validate_environment, ENV_VAR_RULES

    errors = validate_environment()
    for error in errors:
        print(f"{error.var_name}: {error.message}")

    ok = log_validation_results(logger)

Exports:
    ENV_VAR_RULES: Dict of all validation rules
    ValidationError: Dataclass for validation errors
    EnvVarRule: Dataclass for a single rule
    validate_environment: Main validation function
    validate_single_var: Validate one variable
    log_validation_results: Log results, return False on errors
"""

import os
import re
from dataclasses import dataclass
from typing import Dict, List, Optional, Pattern, Any


# ============================================================================
# VALIDATION ERROR
# ============================================================================

@dataclass
class ValidationError:
    """Result of a failed environment variable validation."""
    var_name: str
    message: str
    current_value: Optional[str]
    expected_pattern: str
    fix_suggestion: str
    severity: str = "error"  # error, warning

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dict for JSON serialization."""
        return {
            "var_name": self.var_name,
            "message": self.message,
            "current_value": self._mask_sensitive(self.current_value),
            "expected_pattern": self.expected_pattern,
            "fix_suggestion": self.fix_suggestion,
            "severity": self.severity,
        }

    def _mask_sensitive(self, value: Optional[str]) -> Optional[str]:
        """Mask potentially sensitive values."""
        if value is None:
            return None
        sensitive_keywords = ["password", "secret", "key", "token", "connection"]
        var_lower = self.var_name.lower()
        if any(kw in var_lower for kw in sensitive_keywords):
            return "***MASKED***"
        if len(value) > 30:
            return f"{value[:20]}...({len(value)} chars)"
        return value


# ============================================================================
# VALIDATION RULE DEFINITION
# ============================================================================

@dataclass
class EnvVarRule:
    """
    Validation rule for an environment variable.

    Attributes:
        pattern: Compiled regex pattern for validation
        pattern_description: Human-readable description of expected format
        required: Whether this variable must be set
        fix_suggestion: How to fix if validation fails
        example: Example valid value
        allow_empty: Allow empty string (default False)
        default_value: Default value used if not set (for warning messages)
        warn_on_default: Emit warning when using default value
        max_value: Upper bound for numeric values (inclusive)
    """
    pattern: Pattern
    pattern_description: str
    required: bool
    fix_suggestion: str
    example: str
    allow_empty: bool = False
    default_value: Optional[str] = None
    warn_on_default: bool = True
    max_value: Optional[float] = None


# ============================================================================
# VALIDATION RULES - Single source of truth for env var formats
# ============================================================================

_ORCHESTRATOR_URL = re.compile(
    r"^(https://[a-z0-9][a-z0-9.-]+\.[a-z]{2,}|http://(localhost|127\.0\.0\.1))(:[0-9]+)?(/.*)?$",
    re.IGNORECASE
)
_KEY_VAULT_NAME = re.compile(r"^[a-zA-Z][a-zA-Z0-9-]{1,22}[a-zA-Z0-9]$")
_ENTITY_NAME = re.compile(r"^[A-Za-z0-9][A-Za-z0-9._-]{0,49}$")
_POSITIVE_NUMBER = re.compile(r"^(?=.*[1-9])([0-9]+(\.[0-9]*)?|\.[0-9]+)$")
_ENVIRONMENT = re.compile(r"^(dev|qa|uat|test|staging|prod|production)$")
_BOOLEAN = re.compile(r"^(true|false|1|0|yes|no)$", re.IGNORECASE)


ENV_VAR_RULES: Dict[str, EnvVarRule] = {
    # =========================================================================
    # ORCHESTRATION SERVICE (Critical - every message is forwarded here)
    # =========================================================================
    "ORCHESTRATOR_BASE_URL": EnvVarRule(
        pattern=_ORCHESTRATOR_URL,
        pattern_description="https URL (http allowed only for localhost)",
        required=True,
        fix_suggestion="Set the orchestration service base URL",
        example="https://orchestrator.contoso.com",
    ),

    "ORCHESTRATOR_TIMEOUT_SECONDS": EnvVarRule(
        pattern=_POSITIVE_NUMBER,
        pattern_description="Positive number of seconds, at most 600",
        required=False,
        fix_suggestion="Use a positive number like 30",
        example="30",
        default_value="30",
        max_value=600,
    ),

    # =========================================================================
    # CREDENTIALS
    # =========================================================================
    "KEY_VAULT_NAME": EnvVarRule(
        pattern=_KEY_VAULT_NAME,
        pattern_description="3-24 chars, letters, digits and hyphens, starts with a letter",
        required=False,
        fix_suggestion="Use the Key Vault name, not its URL",
        example="metadata-kv",
        warn_on_default=False,
    ),

    # =========================================================================
    # SERVICE BUS ROUTES
    # =========================================================================
    "SERVICE_BUS_SUBSCRIPTION": EnvVarRule(
        pattern=_ENTITY_NAME,
        pattern_description="Service Bus subscription name (letters, digits, . _ -), no spaces",
        required=False,
        fix_suggestion="Remove surrounding whitespace from the subscription name",
        example="metadata-processor",
        default_value="metadata-processor",
    ),

    # =========================================================================
    # APPLICATION
    # =========================================================================
    "ENVIRONMENT": EnvVarRule(
        pattern=_ENVIRONMENT,
        pattern_description="One of dev, qa, uat, test, staging, prod, production",
        required=False,
        fix_suggestion="Set ENVIRONMENT to a known deployment stage",
        example="dev",
        default_value="dev",
    ),

    "DEBUG_MODE": EnvVarRule(
        pattern=_BOOLEAN,
        pattern_description="Boolean (true/false)",
        required=False,
        fix_suggestion="Use true or false",
        example="false",
        warn_on_default=False,
    ),
}


def validate_single_var(
    var_name: str,
    rule: EnvVarRule,
    include_warnings: bool = True
) -> Optional[ValidationError]:
    """
    Validate a single environment variable against its rule.

    Returns:
        ValidationError if validation fails or warning if using default, None if passes
    """
    value = os.environ.get(var_name)

    if rule.required and (value is None or (not rule.allow_empty and value.strip() == "")):
        return ValidationError(
            var_name=var_name,
            message="Required environment variable not set",
            current_value=value,
            expected_pattern=rule.pattern_description,
            fix_suggestion=f"{rule.fix_suggestion}. Example: {rule.example}",
            severity="error",
        )

    if value is None or value == "":
        if include_warnings and not rule.required and rule.warn_on_default and rule.default_value is not None:
            return ValidationError(
                var_name=var_name,
                message="Not set, using default value",
                current_value=None,
                expected_pattern=f"Default: {rule.default_value}",
                fix_suggestion=f"Set explicitly or accept default. {rule.fix_suggestion}",
                severity="warning",
            )
        return None

    if not rule.pattern.match(value):
        return ValidationError(
            var_name=var_name,
            message="Invalid format",
            current_value=value,
            expected_pattern=rule.pattern_description,
            fix_suggestion=f"{rule.fix_suggestion}. Example: {rule.example}",
            severity="error",
        )

    if rule.max_value is not None and float(value) > rule.max_value:
        return ValidationError(
            var_name=var_name,
            message=f"Out of range (max {rule.max_value:g})",
            current_value=value,
            expected_pattern=rule.pattern_description,
            fix_suggestion=f"{rule.fix_suggestion}. Example: {rule.example}",
            severity="error",
        )

    return None


def validate_environment(
    rules: Optional[Dict[str, EnvVarRule]] = None,
    include_warnings: bool = True
) -> List[ValidationError]:
    """
    Validate all environment variables against their rules.

    Args:
        rules: Optional custom rules dict (defaults to ENV_VAR_RULES)
        include_warnings: Whether to include warnings for vars using defaults

    Returns:
        List of ValidationError objects (errors and optionally warnings)
    """
    if rules is None:
        rules = ENV_VAR_RULES

    results = []
    for var_name, rule in rules.items():
        result = validate_single_var(var_name, rule, include_warnings=include_warnings)
        if result:
            results.append(result)

    return results


def log_validation_results(logger=None) -> bool:
    """
    Log validation results at appropriate levels.

    Logs errors at ERROR level, warnings at WARNING level.

    Args:
        logger: Optional logger instance (uses print if None)

    Returns:
        True if no errors (warnings are OK), False otherwise
    """
    all_results = validate_environment(include_warnings=True)

    errors = [r for r in all_results if r.severity == "error"]
    warnings = [r for r in all_results if r.severity == "warning"]

    def _log(level: str, msg: str):
        if logger:
            getattr(logger, level.lower())(msg)
        else:
            print(f"[{level.upper()}] {msg}")

    for warning in warnings:
        _log("warning", f"{warning.var_name}: {warning.message} ({warning.expected_pattern})")

    for error in errors:
        _log(
            "error",
            f"{error.var_name}: {error.message}. Expected: {error.expected_pattern}. "
            f"Fix: {error.fix_suggestion}"
        )

    if errors:
        _log("error", f"Environment validation failed: {len(errors)} error(s)")
        return False

    return True
