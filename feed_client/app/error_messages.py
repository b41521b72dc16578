from api_client import ApiError

CONNECTION_MESSAGE = "Unable to connect. Please check your internet connection."
SERVER_MESSAGE = "Something went wrong. Please try again later."
UNEXPECTED_MESSAGE = "An unexpected error occurred."

# Map a failure to the sentence shown to the user
def get_error_message(error: BaseException) -> str:
    if not isinstance(error, ApiError):
        return UNEXPECTED_MESSAGE

    if error.code == "VALIDATION_ERROR":
        return error.message
    if error.code == "NETWORK_ERROR":
        return CONNECTION_MESSAGE
    if error.code in ("DATABASE_ERROR", "INTERNAL_ERROR"):
        return SERVER_MESSAGE

    return UNEXPECTED_MESSAGE
