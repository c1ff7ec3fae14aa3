class AppStatusCode:
    # Success
    DATA_RETRIEVED_SUCCESSFULLY = "100"
    CREATED_SUCCESSFULLY = "101"
    UPDATED_SUCCESSFULLY = "102"
    DELETED_SUCCESSFULLY = "103"

    # Client errors
    INVALID_INPUT = "200"
    VALIDATION_FAILED = "201"
    DUPLICATE_ADD_ERROR = "202"
    RECORD_NOT_FOUND = "203"

    # Server errors
    OPERATION_FAILED = "300"
    INTERNAL_ERROR = "301"
