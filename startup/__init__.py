# ============================================================================
# STARTUP MODULE
# ============================================================================
# STATUS: Infrastructure - Startup validation orchestration
# PURPOSE: Validation before Service Bus trigger registration
# ============================================================================
"""
Startup Validation Module.

Validates the environment, the route table and the API key source
before function_app.py registers any Service Bus trigger. On failure the
app still loads but registers no triggers, so messages stay in their
subscriptions instead of burning delivery attempts against a
misconfigured app.

Design Philosophy:
    - SOFT VALIDATION: Store results, don't crash
    - DIAGNOSTIC FRIENDLY: Failures logged with the offending variable

Exports:
    run_startup_validation: Run all phases
    STARTUP_STATE: Global state populated by run_startup_validation
    StartupState, ValidationResult: State dataclasses
"""

from .state import STARTUP_STATE, StartupState, ValidationResult
from .orchestrator import run_startup_validation

__all__ = [
    'run_startup_validation',
    'STARTUP_STATE',
    'StartupState',
    'ValidationResult',
]
