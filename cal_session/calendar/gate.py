"""Authorization gate: tracks calendar permission and picks the app mode."""

from typing import Callable, Optional
import logging

from ..core.errors import ErrorKind, ErrorState
from ..core.exceptions import ProviderError
from ..core.models import AppMode, AuthorizationState
from .provider import CalendarProvider


DENIED_MESSAGE = "Calendar access denied. Enable in Settings."


class AuthorizationGate:
    """Permission state machine in front of a calendar provider.

    Starts at NOT_DETERMINED. ``check_status`` re-reads the provider (and can
    move to any state if the grant changed outside the app); ``request_access``
    moves NOT_DETERMINED to GRANTED or DENIED. DENIED never leads back to a
    prompt from inside the app: the user has to go to System Settings.
    """

    def __init__(self, provider: CalendarProvider,
                 errors: Optional[ErrorState] = None,
                 on_change: Optional[Callable[[AuthorizationState], None]] = None,
                 logger: Optional[logging.Logger] = None):
        self.provider = provider
        self.errors = errors if errors is not None else ErrorState()
        self.logger = logger or logging.getLogger(__name__)
        self._on_change = on_change
        self._state = AuthorizationState.NOT_DETERMINED

    @property
    def state(self) -> AuthorizationState:
        return self._state

    @property
    def mode(self) -> AppMode:
        return AppMode.for_state(self._state)

    @property
    def can_request(self) -> bool:
        return self._state is AuthorizationState.NOT_DETERMINED

    def check_status(self) -> AuthorizationState:
        """Refresh the state from the provider without prompting."""
        try:
            self._set_state(self.provider.authorization_state())
        except ProviderError as e:
            self.logger.warning(f"Could not read calendar authorization status: {e}")
        return self._state

    def request_access(self) -> AuthorizationState:
        """Ask the user for calendar access, blocking until they answer."""
        self.check_status()

        if self._state is AuthorizationState.DENIED:
            self.logger.debug("Access previously denied; not prompting again")
            return self._state
        if self._state is AuthorizationState.GRANTED:
            return self._state

        try:
            granted = self.provider.request_full_access()
        except ProviderError as e:
            self.logger.error(f"Calendar access request failed: {e}")
            self.check_status()
            self.errors.record(
                ErrorKind.PERMISSION_REQUEST_FAILED,
                f"Failed to request access: {e}"
            )
            return self._state

        if granted:
            self.logger.info("Calendar access granted")
            self._set_state(AuthorizationState.GRANTED)
        else:
            self.logger.info("Calendar access denied by user")
            self._set_state(AuthorizationState.DENIED)
            self.errors.record(ErrorKind.PERMISSION_DENIED, DENIED_MESSAGE)

        return self._state

    def _set_state(self, state: AuthorizationState) -> None:
        if state is self._state:
            return
        self.logger.debug(f"Authorization state {self._state.value} -> {state.value}")
        self._state = state
        if self._on_change is not None:
            self._on_change(state)
