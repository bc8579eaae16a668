from reminder_api.schemas.send import SendErrorResponse, SendSuccessResponse

__all__ = ["SendErrorResponse", "SendSuccessResponse"]
