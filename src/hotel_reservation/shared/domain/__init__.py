from .entity import AggregateRoot as AggregateRoot
from .entity import Entity as Entity
from .exception import (
    BusinessRuleViolationException as BusinessRuleViolationException,
)
from .exception import (
    DomainException as DomainException,
)
from .exception import (
    DuplicateResourceException as DuplicateResourceException,
)
from .exception import (
    OptimisticLockException as OptimisticLockException,
)
from .exception import (
    ResourceNotFoundException as ResourceNotFoundException,
)
from .repository import Repository as Repository
from .value_object import (
    BookingId as BookingId,
)
from .value_object import (
    Caller as Caller,
)
from .value_object import (
    Currency as Currency,
)
from .value_object import (
    Money as Money,
)
from .value_object import (
    Role as Role,
)
from .value_object import (
    UserId as UserId,
)
