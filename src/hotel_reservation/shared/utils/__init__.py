from .caller_context import caller_from_event as caller_from_event
from .http_response import api_response as api_response
from .http_response import domain_error_response as domain_error_response
from .http_response import error_response as error_response
from .http_response import (
    request_validation_error_response as request_validation_error_response,
)
from .logger import get_logger as get_logger
from .validators import to_decimal as to_decimal
