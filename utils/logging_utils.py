"""
Logging utilities for the asset resolver service.
"""
import logging
import sys
import datetime
import google.cloud.logging

CLOUD_LOGGER_NAME = 'asset-resolver'


def setup_logging(level="INFO", enable_cloud=True):
    """
    Set up logging for the application.

    Returns:
        A (logger, cloud_logger, use_cloud_logging) tuple. cloud_logger is None when
        Cloud Logging is disabled or its client can't be created.
    """
    cloud_logger = None
    use_cloud_logging = False
    if enable_cloud:
        try:
            cloud_logger_client = google.cloud.logging.Client()
            cloud_logger = cloud_logger_client.logger(CLOUD_LOGGER_NAME)
            use_cloud_logging = True
        except Exception as e:
            print(f"Failed to initialize Cloud Logging: {str(e)}")

    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format='%(asctime)s - %(levelname)s - %(message)s',
        handlers=[
            logging.StreamHandler(sys.stdout)
        ]
    )
    logger = logging.getLogger(__name__)
    if use_cloud_logging:
        logger.info("Cloud Logging initialized successfully")

    return logger, cloud_logger, use_cloud_logging


def log_to_cloud(cloud_logger, severity, message, use_cloud_logging=True, **kwargs):
    """Log to Cloud Logging with structured data."""
    if not use_cloud_logging or cloud_logger is None:
        return

    try:
        struct_data = {
            "message": message,
            "component": CLOUD_LOGGER_NAME,
            **kwargs
        }
        cloud_logger.log_struct(struct_data, severity=severity)
    except Exception as e:
        print(f"Failed to log to Cloud Logging: {str(e)}")


def log_message(severity, message, recent_logs=None, logger=None, cloud_logger=None, use_cloud_logging=False, **kwargs):
    """Log a message to standard logging and Cloud Logging, and add it to the recent logs."""
    timestamp = datetime.datetime.now().strftime("%Y-%m-%d %H:%M:%S")

    if recent_logs is not None:
        recent_logs.appendleft(f"{timestamp} - {severity} - {message}")

    if logger:
        if severity == "ERROR":
            logger.error(message)
        elif severity == "WARNING":
            logger.warning(message)
        elif severity == "DEBUG":
            logger.debug(message)
        else:
            logger.info(message)

    if cloud_logger:
        log_to_cloud(cloud_logger, severity, message, use_cloud_logging, **kwargs)
