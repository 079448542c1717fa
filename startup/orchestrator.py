# ============================================================================
# STARTUP VALIDATION ORCHESTRATOR
# ============================================================================
# STATUS: Infrastructure - Startup validation coordination
# PURPOSE: Run all validation phases in order and populate startup state
# ============================================================================
"""
Startup Validation Orchestrator.

Validation Phases:
    1. Environment variables (regex validation)
    2. Route table (loads, unique function names and subscriptions)
    3. API key source (KEY_VAULT_NAME, or a non-empty env binding per route)

Usage:
    from startup import run_startup_validation

    state = run_startup_validation()
    if state.all_passed:
        # Register Service Bus triggers
        pass
"""

import logging
import os
from typing import Optional

from .state import STARTUP_STATE, StartupState, ValidationResult

# Minimal dependencies: plain stdlib logger
_logger = logging.getLogger("startup.orchestrator")


def run_startup_validation(state: Optional[StartupState] = None) -> StartupState:
    """
    Run all startup validations and finalize the startup state.

    Args:
        state: State to populate (defaults to the global STARTUP_STATE)

    Returns:
        The populated StartupState
    """
    if state is None:
        state = STARTUP_STATE

    _logger.info("STARTUP VALIDATION STARTING")

    _logger.info("Phase 1: Validating environment variables...")
    state.env_vars = _validate_environment()
    if not state.env_vars.passed:
        _logger.critical(f"Phase 1 FAILED: {state.env_vars.error_message}")

    _logger.info("Phase 2: Validating route table...")
    state.routes = _validate_routes()
    if not state.routes.passed:
        _logger.critical(f"Phase 2 FAILED: {state.routes.error_message}")

    _logger.info("Phase 3: Validating API key source...")
    state.credentials = _validate_credentials()
    if not state.credentials.passed:
        _logger.critical(f"Phase 3 FAILED: {state.credentials.error_message}")

    state.finalize()

    if state.all_passed:
        _logger.info("STARTUP VALIDATION COMPLETE - All checks PASSED")
    else:
        failed = state.get_failed_checks()
        _logger.warning(f"STARTUP VALIDATION COMPLETE - {len(failed)} check(s) FAILED")
        _logger.warning(f"Failed: {[f.name for f in failed]}")
        _logger.warning("Service Bus triggers will NOT be registered")

    return state


def _validate_environment() -> ValidationResult:
    """Validate environment variables using config.env_validation."""
    try:
        from config.env_validation import validate_environment, log_validation_results

        errors = validate_environment(include_warnings=False)

        if errors:
            log_validation_results(_logger)

            error_vars = [e.var_name for e in errors]
            return ValidationResult(
                name="env_vars",
                passed=False,
                error_type="INVALID_ENV_VARS",
                error_message=f"Invalid environment variables: {', '.join(error_vars)}",
                details={
                    "error_count": len(errors),
                    "error_vars": error_vars,
                    "errors": [e.to_dict() for e in errors],
                }
            )

        _logger.info("Environment variables validated successfully")
        return ValidationResult(name="env_vars", passed=True)

    except Exception as e:
        _logger.error(f"Environment validation exception: {e}")
        return ValidationResult(
            name="env_vars",
            passed=False,
            error_type="VALIDATION_EXCEPTION",
            error_message=str(e),
        )


def _validate_routes() -> ValidationResult:
    """Load the route table from configuration."""
    try:
        from config import get_config, debug_config

        routes = get_config().routes
        return ValidationResult(
            name="routes",
            passed=True,
            details={
                "function_names": list(routes.function_names),
                "subscriptions": [f"{r.topic_name}/{r.subscription_name}" for r in routes],
                "config": debug_config(),
            }
        )

    except Exception as e:
        _logger.error(f"Route table validation exception: {e}")
        return ValidationResult(
            name="routes",
            passed=False,
            error_type="INVALID_ROUTES",
            error_message=str(e),
        )


def _validate_credentials() -> ValidationResult:
    """
    Check that every route can resolve its API key.

    With KEY_VAULT_NAME set the secret is looked up on first delivery, so
    only its presence is checked here. Otherwise each route needs a
    non-empty env binding named after its credential key. Values are
    never read into the result.
    """
    try:
        from config import get_config
        from infrastructure.credentials import ApiKeyProvider

        config = get_config()
        if config.orchestrator.key_vault_name:
            return ValidationResult(
                name="credentials",
                passed=True,
                details={"source": "key_vault", "key_vault_name": config.orchestrator.key_vault_name},
            )

        env_names = sorted({ApiKeyProvider.env_var_name(r.credential_key_name) for r in config.routes})
        missing = [name for name in env_names if not os.environ.get(name, "").strip()]
        if missing:
            return ValidationResult(
                name="credentials",
                passed=False,
                error_type="MISSING_API_KEY",
                error_message=f"API key not configured: set {', '.join(missing)} or KEY_VAULT_NAME",
                details={"source": "environment", "missing": missing},
            )

        return ValidationResult(
            name="credentials",
            passed=True,
            details={"source": "environment", "env_vars": env_names},
        )

    except Exception as e:
        _logger.error(f"Credential validation exception: {e}")
        return ValidationResult(
            name="credentials",
            passed=False,
            error_type="VALIDATION_EXCEPTION",
            error_message=str(e),
        )
