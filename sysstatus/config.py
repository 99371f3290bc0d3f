from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Central configuration loaded from environment / .env file."""

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}

    # Persisted check state (relative to CWD unless absolute)
    persistence_path: str = "persistence.json"

    # Disk check
    disk_path: str = "/"
    disk_warning_percent: float = 75.0
    disk_critical_percent: float = 90.0

    # Failed units check
    systemctl_path: str = "systemctl"

    # Mail delivery (local sendmail-compatible agent)
    sendmail_path: str = "/usr/sbin/sendmail"
    mail_from: str = "System Status <root@localhost>"
    mail_to: str = "root@localhost"
    mail_subject_prefix: str = "System Status"

    # Logging
    log_level: str = "INFO"


settings = Settings()
