#!/usr/bin/env python3
"""
Asset Resolver Application
This application resolves token symbols to mainnet addresses and ERC20 contracts
and serves the results over a small JSON API.
"""

import sys
import time
import asyncio
import datetime
from collections import deque
from flask import Flask, jsonify

from utils.logging_utils import setup_logging, log_message
from utils.metadata_utils import load_settings
from assets.addresses import load_address_table
from assets.resolver import initialize_asset_resolver, get_asset_resolver
from assets.routes import register_asset_routes
from evm.connection import initialize_evm_connection, get_evm_connection

# Create Flask app
app = Flask(__name__)

# Global variables for application state
start_time = datetime.datetime.now()
recent_logs = deque(maxlen=50)  # Store the 50 most recent log entries
logger = None
cloud_logger = None
USE_CLOUD_LOGGING = False


def get_uptime():
    """Get the application uptime as a formatted string."""
    uptime = datetime.datetime.now() - start_time
    hours, remainder = divmod(uptime.seconds, 3600)
    minutes, seconds = divmod(remainder, 60)

    if uptime.days > 0:
        return f"{uptime.days} days, {hours} hours, {minutes} minutes"
    elif hours > 0:
        return f"{hours} hours, {minutes} minutes"
    return f"{minutes} minutes, {seconds} seconds"


def log(severity, message, **kwargs):
    log_message(severity, message, recent_logs=recent_logs, logger=logger,
                cloud_logger=cloud_logger, use_cloud_logging=USE_CLOUD_LOGGING, **kwargs)


@app.route('/')
def index():
    """Report the application status."""
    resolver = get_asset_resolver()
    return jsonify({
        'uptime': get_uptime(),
        'evm': get_evm_connection().get_connection_status(),
        'network': resolver.network,
        'known_assets': len(resolver.addresses.get(resolver.network, {}))
    })


@app.route('/api/logs', methods=['GET'])
def logs():
    """Return the most recent log entries."""
    return jsonify({'logs': list(recent_logs)})


def main():
    """Main entry point for the application."""
    global logger, cloud_logger, USE_CLOUD_LOGGING

    settings = load_settings()
    logger, cloud_logger, USE_CLOUD_LOGGING = setup_logging(
        settings['log_level'], enable_cloud=settings['cloud_logging'])

    try:
        log("INFO", "Starting asset resolver application")

        addresses = load_address_table(settings['address_file'])
        if settings['address_file']:
            log("INFO", f"Loaded address overrides from {settings['address_file']}")
        resolver = initialize_asset_resolver(addresses=addresses)
        log("INFO", f"Asset resolver ready with {len(addresses.get(resolver.network, {}))} {resolver.network} assets")

        log("INFO", f"Connecting to EVM RPC at {settings['rpc_url']}")
        evm_connection = initialize_evm_connection(settings['rpc_url'])
        if asyncio.run(evm_connection.connect()):
            log("INFO", f"Connected to chain {evm_connection.network_info['chain_id']}, "
                        f"block {evm_connection.network_info['latest_block']}")
        else:
            log("WARNING", "Failed to connect to EVM network. Contract resolution may fail.")

        register_asset_routes(app)

        log("INFO", f"Starting web server on port {settings['port']}")
        app.run(host='0.0.0.0', port=settings['port'])

    except Exception as e:
        log("ERROR", f"Application failed: {str(e)}", traceback=str(e))
        # Give log handlers a moment to flush before exiting
        time.sleep(5)
        sys.exit(1)


if __name__ == "__main__":
    main()
