"""Vetria - Main application entry point."""

from __future__ import annotations

import logging
import logging.handlers
from pathlib import Path

from dotenv import load_dotenv

import flet as ft

from vetria.app.state import AppState
from vetria.app.ui.layouts.shell import build_shell
from vetria.shared.core.configuration import LoggingConfig, ValidationLevel, get_config
from vetria.shared.core.service_registry import register_cleanup_handler

# Load environment variables from .env file in project root
env_path = Path(__file__).resolve().parent.parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

logger = logging.getLogger(__name__)

log_level_map = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def configure_logging(log_config: LoggingConfig) -> Path:
    """File handler at the configured level, console handler for warnings and errors."""
    logs_dir = Path(log_config.log_dir)
    logs_dir.mkdir(parents=True, exist_ok=True)
    log_file_path = logs_dir / "vetria.log"
    file_log_level = log_level_map.get(log_config.level.upper(), logging.DEBUG)

    root_logger = logging.getLogger()
    root_logger.setLevel(file_log_level)
    root_logger.handlers.clear()

    file_handler = logging.handlers.RotatingFileHandler(
        log_file_path,
        maxBytes=log_config.max_bytes,
        backupCount=log_config.backup_count,
        encoding='utf-8'
    )
    file_handler.setLevel(file_log_level)
    file_handler.setFormatter(logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    ))
    root_logger.addHandler(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.WARNING)
    console_handler.setFormatter(logging.Formatter(
        "%(asctime)s - %(levelname)s - %(message)s",
        datefmt="%H:%M:%S"
    ))
    root_logger.addHandler(console_handler)

    # Suppress verbose third-party library logs
    for noisy in ("httpx", "httpcore", "flet", "flet_controls", "flet_transport"):
        logging.getLogger(noisy).setLevel(logging.WARNING)

    return log_file_path


config = get_config(ValidationLevel.LENIENT)
log_file = configure_logging(config.logging)
logger.info(f"Logging configured: file={log_file}, console=WARNING+")


async def main(page: ft.Page) -> None:
    """Main Flet application entry point."""
    logger.info("Initializing Vetria...")
    page.title = config.ui.app_title

    app_state = AppState.from_config(config)
    register_cleanup_handler(app_state.close)
    await app_state.initialize()

    shell_view = await build_shell(page, app_state, config.ui)
    page.views.append(shell_view)
    page.update()

    state = await app_state.launch()
    logger.info(f"Launch resolved to {state.status.value}")


def run() -> None:
    if config.ui.flet_web_mode:
        logger.info(f"Starting Flet app in WEB mode on port {config.ui.flet_port}")
        ft.run(main, view=ft.AppView.WEB_BROWSER, port=config.ui.flet_port, host="127.0.0.1")
    else:
        logger.info("Starting Flet app in DESKTOP mode")
        ft.run(main, view=ft.AppView.FLET_APP)


if __name__ == "__main__":
    run()
