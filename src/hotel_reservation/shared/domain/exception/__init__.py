from .exceptions import (
    BusinessRuleViolationException as BusinessRuleViolationException,
)
from .exceptions import DomainException as DomainException
from .exceptions import (
    DuplicateResourceException as DuplicateResourceException,
)
from .exceptions import (
    InsufficientPointsException as InsufficientPointsException,
)
from .exceptions import NoRoomsAvailableException as NoRoomsAvailableException
from .exceptions import OptimisticLockException as OptimisticLockException
from .exceptions import RefundFailedException as RefundFailedException
from .exceptions import (
    ResourceNotFoundException as ResourceNotFoundException,
)
from .exceptions import (
    ResourceUnavailableException as ResourceUnavailableException,
)
from .exceptions import UnauthorizedException as UnauthorizedException
from .exceptions import ValidationException as ValidationException
