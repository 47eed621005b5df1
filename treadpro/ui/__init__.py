"""UI package."""

from .home_widget import HomeWidget
from .setup_widget import SetupWidget
from .runner_widget import RunnerWidget
from .summary_widget import SummaryWidget
from .profile_chart import ProfileChart
from .settings_dialog import SettingsDialog

__all__ = [
    "HomeWidget",
    "SetupWidget",
    "RunnerWidget",
    "SummaryWidget",
    "ProfileChart",
    "SettingsDialog",
]
