# ============================================================================
# EXCEPTIONS
# ============================================================================
# STATUS: Shared - used by config, infrastructure and trigger layers
# PURPOSE: Exception hierarchy separating contract violations from runtime failures
# EXPORTS: ContractViolationError, BusinessLogicError, OrchestrationError,
#          ResourceNotFoundError, ConfigurationError, CredentialError
# DEPENDENCIES: None (standard library only)
# ============================================================================

"""
Custom Exception Hierarchy

Distinguishes between:
1. Contract Violations (programming or binding bugs that need fixing)
2. Business Logic Failures (expected runtime issues)
3. Configuration Errors (fatal at startup)

Service Bus triggers never swallow any of these. An exception escaping a
trigger makes the Functions host abandon the message so Service Bus can
redeliver it, and dead-letter it once MaxDeliveryCount is reached.
"""


class ContractViolationError(TypeError):
    """
    Raised when component contracts are violated.

    These indicate:
    - Missing message body from the trigger binding
    - Delivery count below 1
    - Empty message id

    These should NEVER be caught and handled - they indicate bugs
    in the binding or the caller.
    """
    pass


class BusinessLogicError(Exception):
    """
    Base class for expected runtime failures.

    Subclasses represent specific categories of failures.
    """
    pass


class OrchestrationError(BusinessLogicError):
    """
    Orchestration service call failed.

    Transient and permanent failures are not distinguished. Both reach
    the Functions host unchanged and drive Service Bus redelivery.

    Examples:
        - Orchestration service returned non-2xx
        - Connection refused or DNS failure
        - Request timed out
    """

    def __init__(self, message: str, status_code: int = None):
        super().__init__(message)
        self.status_code = status_code


class ResourceNotFoundError(BusinessLogicError):
    """
    Requested resource does not exist.

    Examples:
        - No dispatcher registered for a function name
        - No route for a topic/subscription pair
    """
    pass


class ConfigurationError(Exception):
    """
    System configuration error.

    These are typically fatal and indicate misconfiguration
    that prevents the Function App from starting.

    Examples:
        - Missing ORCHESTRATOR_BASE_URL
        - Duplicate route function names
        - Invalid environment variable formats
    """
    pass


class CredentialError(ConfigurationError):
    """
    Orchestration API key could not be resolved.

    Examples:
        - Environment binding not set
        - Key Vault secret missing or empty
    """
    pass
