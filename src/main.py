import logging
import signal
import sys
from typing import Optional

from app_config import (
    AppConfig,
    AppConfigurationError,
    load_app_config,
    resolve_config_path,
)
from app_config_parser import log_level
from focus_timer import (
    DurationRegistry,
    MODE_FOCUS,
    MODE_LONG_BREAK,
    MODE_SHORT_BREAK,
)
from notify import CompletionNotifier, NotificationError
from organizer import NotesPad, TaskList
from runtime import RuntimeBootstrap, RuntimeEngine
from server import ServerConfigurationError, UIServer, UIServerConfig
from storage import InMemoryStore, JsonFileStore, KeyValueStore


def setup_logging(level: int = logging.INFO) -> logging.Logger:
    """Configure logging for the application."""
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    return logging.getLogger("zenfocus")


def setup_signal_handlers(engine: RuntimeEngine) -> None:
    """Set up graceful shutdown on SIGTERM and SIGINT."""

    def signal_handler(signum: int, frame) -> None:
        signal_name = signal.Signals(signum).name
        logging.getLogger("zenfocus").info("%s received, stopping...", signal_name)
        engine.request_stop()

    signal.signal(signal.SIGTERM, signal_handler)
    signal.signal(signal.SIGINT, signal_handler)


def build_store(app_config: AppConfig, logger: logging.Logger) -> KeyValueStore:
    if not app_config.storage.enabled:
        logger.warning("Persistence disabled; settings, tasks and notes live in memory only.")
        return InMemoryStore()
    logger.info("Using local store: %s", app_config.storage.path)
    return JsonFileStore(app_config.storage.path, logger=logging.getLogger("storage"))


def build_notifier(
    app_config: AppConfig,
    logger: logging.Logger,
) -> Optional[CompletionNotifier]:
    settings = app_config.notification
    if not settings.enabled:
        logger.info("Completion sound disabled")
        return None

    try:
        # sounddevice loads PortAudio on import; a missing library only disables the beep.
        from notify.output import SoundDeviceAudioOutput

        output = SoundDeviceAudioOutput(
            output_device_index=settings.output_device,
            logger=logging.getLogger("notify.output"),
        )
        return CompletionNotifier(
            output,
            frequency_hz=settings.frequency_hz,
            duration_seconds=settings.duration_seconds,
            volume=settings.volume,
            logger=logging.getLogger("notify"),
        )
    except (ImportError, OSError, NotificationError) as error:
        logger.warning("Completion sound unavailable: %s", error)
        return None


def build_ui_server(app_config: AppConfig, logger: logging.Logger) -> Optional[UIServer]:
    try:
        ui_server_config = UIServerConfig.from_settings(app_config.ui_server)
    except ServerConfigurationError as error:
        logger.error(f"UI server configuration error: {error}")
        logger.warning("Continuing without UI server.")
        return None

    if not ui_server_config.enabled:
        return None

    try:
        ui_server = UIServer(
            config=ui_server_config,
            logger=logging.getLogger("ui_server"),
        )
        logger.info("Starting UI server...")
        ui_server.start(timeout_seconds=5.0)
        logger.info(
            "UI server ready at http://%s:%d",
            ui_server.host,
            ui_server.port,
        )
        return ui_server
    except Exception as error:
        logger.error(f"UI server startup failed: {error}")
        logger.warning("Continuing without UI server.")
        return None


def main() -> int:
    """Run the focus widget."""
    logger = setup_logging(level=logging.INFO)

    try:
        config_path = resolve_config_path()
        app_config = load_app_config(str(config_path))
        logger.info("Loaded runtime config: %s", config_path)
    except AppConfigurationError as error:
        logger.error(f"App configuration error: {error}")
        return 1

    logging.getLogger().setLevel(log_level(app_config.logging))

    store = build_store(app_config, logger)
    registry = DurationRegistry.load(
        store,
        defaults={
            MODE_FOCUS: app_config.timer.focus_minutes * 60,
            MODE_SHORT_BREAK: app_config.timer.short_break_minutes * 60,
            MODE_LONG_BREAK: app_config.timer.long_break_minutes * 60,
        },
        logger=logging.getLogger("focus_timer.durations"),
    )
    tasks = TaskList(store, logger=logging.getLogger("organizer.tasks"))
    notes = NotesPad(store, logger=logging.getLogger("organizer.notes"))
    notifier = build_notifier(app_config, logger)
    ui_server = build_ui_server(app_config, logger)

    engine = RuntimeEngine(
        RuntimeBootstrap(
            logger=logging.getLogger("runtime"),
            registry=registry,
            tasks=tasks,
            notes=notes,
            notifier=notifier,
            ui_server=ui_server,
        )
    )
    setup_signal_handlers(engine)
    return engine.run()


if __name__ == "__main__":
    sys.exit(main())
