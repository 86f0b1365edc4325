"""Permission commands: status, grant, settings."""

from ..core.models import AppMode, AuthorizationState
from ..utils.macos import open_privacy_settings
from .base import SessionCommand


class StatusCommand(SessionCommand):
    """Show the current calendar permission without prompting."""

    def run(self) -> bool:
        state = self.manager.check_authorization_status()
        mode = self.manager.mode

        print(f"Calendar access: {state.value.replace('_', ' ')}")
        if mode is AppMode.SHOW_EVENTS:
            print("   Run 'cal-session list' to see upcoming events.")
        elif mode is AppMode.OPEN_SETTINGS:
            print("   Run 'cal-session settings' to change this in System Settings.")
        else:
            print("   Run 'cal-session grant' to allow access.")
        return True


class AccessCommand(SessionCommand):
    """Trigger the system permission prompt when it has never been shown."""

    def run(self) -> bool:
        state = self.manager.check_authorization_status()

        if state is AuthorizationState.GRANTED:
            print("✅ Calendar access already granted.")
            return True

        if state is AuthorizationState.DENIED:
            self.print_permission_prompt(AppMode.OPEN_SETTINGS)
            return False

        print("Requesting calendar access. Answer the system dialog to continue...")
        state = self.manager.request_access()

        if state is AuthorizationState.GRANTED:
            print(f"✅ Calendar access granted. {len(self.manager.events)} upcoming events loaded.")
            return True

        self.report_error(fallback="Calendar access was not granted.")
        return False


class SettingsCommand(SessionCommand):
    """Open the privacy pane where a denied grant can be changed."""

    def run(self) -> bool:
        if open_privacy_settings(logger=self.logger):
            print("Opened System Settings > Privacy & Security > Calendars.")
            return True

        print("Could not open System Settings. Open Privacy & Security > Calendars manually.")
        return False
