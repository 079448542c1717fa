# ============================================================================
# STARTUP STATE
# ============================================================================
# STATUS: Infrastructure - Startup validation state storage
# PURPOSE: Hold validation results that decide whether triggers register
# ============================================================================
"""
Startup State Module.

Stores validation results from function_app.py load. This module has ZERO
dependencies on other project modules so it always imports.

Exports:
    ValidationResult: Result of one validation check
    StartupState: Overall startup state
    STARTUP_STATE: Global singleton instance
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional


@dataclass
class ValidationResult:
    """
    Result of a single validation check.

    Attributes:
        name: Identifier for this validation (e.g., "env_vars", "routes")
        passed: Whether the validation passed
        error_type: Category of error if failed
        error_message: Human-readable error description
        details: Additional context
    """
    name: str
    passed: bool
    error_type: Optional[str] = None
    error_message: Optional[str] = None
    details: Dict[str, Any] = field(default_factory=dict)
    timestamp: str = field(default_factory=lambda: datetime.now(timezone.utc).isoformat())

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dict for JSON serialization."""
        result = {
            "name": self.name,
            "passed": self.passed,
            "timestamp": self.timestamp
        }
        if self.error_type:
            result["error_type"] = self.error_type
        if self.error_message:
            result["error_message"] = self.error_message
        if self.details:
            result["details"] = self.details
        return result


@dataclass
class StartupState:
    """
    Startup state for the Function App.

    Validation Checks:
        env_vars: Environment variables present and well-formed
        routes: Route table loads and is unique
        credentials: Every route has an API key source

    Service Bus triggers are registered only when all_passed is True.
    """

    env_vars: Optional[ValidationResult] = None
    routes: Optional[ValidationResult] = None
    credentials: Optional[ValidationResult] = None

    validation_complete: bool = False
    all_passed: bool = False
    startup_time: str = field(default_factory=lambda: datetime.now(timezone.utc).isoformat())
    critical_error: Optional[str] = None

    def _checks(self) -> List[Optional[ValidationResult]]:
        return [self.env_vars, self.routes, self.credentials]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dict for JSON serialization."""
        return {
            "validation_complete": self.validation_complete,
            "all_passed": self.all_passed,
            "startup_time": self.startup_time,
            "critical_error": self.critical_error,
            "checks": {
                "env_vars": self.env_vars.to_dict() if self.env_vars else None,
                "routes": self.routes.to_dict() if self.routes else None,
                "credentials": self.credentials.to_dict() if self.credentials else None,
            }
        }

    def get_failed_checks(self) -> List[ValidationResult]:
        """Get list of failed validation checks."""
        return [c for c in self._checks() if c is not None and not c.passed]

    def finalize(self) -> None:
        """
        Mark validation as complete and compute all_passed.

        A check that never ran counts as failed.
        """
        self.validation_complete = True
        checks = self._checks()
        self.all_passed = all(c is not None and c.passed for c in checks)

        failed = self.get_failed_checks()
        if failed:
            first = failed[0]
            self.critical_error = f"{first.name}: {first.error_message}"
        else:
            self.critical_error = None


STARTUP_STATE = StartupState()
