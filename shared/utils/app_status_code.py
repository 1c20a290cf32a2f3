class AppStatusCode:
    # success
    DATA_RETRIEVED_SUCCESSFULLY = "100"
    OPERATION_SUCCESSFUL = "101"
    CREATED_SUCCESSFULLY = "102"
    UPDATED_SUCCESSFULLY = "103"

    # validation
    INVALID_INPUT = "200"
    REQUIRED_VALIDATION_ERROR = "201"
    INDIVIDUAL_RECIPIENT_MISSING = "202"
    DEPARTMENT_RECIPIENT_MISSING = "203"

    # lookups and state
    NOT_FOUND = "300"
    INVALID_STATUS_TRANSITION = "301"
    DUPLICATE_ADD_ERROR = "302"
    ASSET_NOT_AVAILABLE = "303"

    # authentication / authorization
    AUTHENTICATION_TOKEN_INVALID = "400"
    AUTHENTICATION_TOKEN_EXPIRED = "401"
    AUTHENTICATION_USER_INVALID = "402"
    UNAUTHORIZED_ACTION = "403"

    # store
    OPERATION_FAILED = "500"
