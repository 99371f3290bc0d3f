"""Health subsystem — check engine, persisted state, alert summary."""

from .engine import Check, CheckError, Report, Status, evaluate, to_report
from .store import PersistedState, StateStore
from .summary import Alert, build_alert
