"""Post-authentication flow.

Whatever way the visitor signs in (password, OTP, registration), the result
is an ``AuthResponse``. ``complete_login`` records it on the session and runs
the guest cart merge before the caller navigates on. The merge is awaited,
and its failure is reported as a warning, never as an error.
"""

import structlog

from cart.facade import CartFacade, MergeOutcome
from identity.session import AuthResponse, AuthSession
from shared.logging import add_context, clear_context

logger = structlog.get_logger(__name__)


async def complete_login(session: AuthSession, facade: CartFacade, auth: AuthResponse) -> MergeOutcome:
    login_id = session.sign_in(auth)
    add_context(user_id=auth.user.id)
    logger.info("Signed in", user_id=auth.user.id, login_id=login_id)

    outcome = await facade.merge_guest_cart()
    if outcome.warning:
        logger.warning("Sign-in completed with a cart warning", user_id=auth.user.id, warning=outcome.warning)
    return outcome


def logout(session: AuthSession, facade: CartFacade) -> None:
    session.sign_out()
    facade.invalidate()
    clear_context()
