"""Cart bounded context: guest cart persistence, remote cart access and the
cart facade that chooses between them.

Only the guest cart is a protean aggregate. The authenticated cart lives on
the server and is reached through ``cart.remote``.
"""

import structlog
from protean.domain import Domain

cart = Domain(name="cart")

logger = structlog.get_logger(__name__)
