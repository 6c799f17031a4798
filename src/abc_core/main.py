import logging
import os

from abc_core.webapi.webapi import DEFAULT_CONTRACT_ADDRESS, create_app


def settings_from_env(environ=None) -> dict:
    """Reads the server settings from ABC_CORE_* environment variables."""
    environ = os.environ if environ is None else environ
    return {
        "host": environ.get("ABC_CORE_HOST", "127.0.0.1"),
        "port": int(environ.get("ABC_CORE_PORT", "5000")),
        "debug": environ.get("ABC_CORE_DEBUG", "false").lower() in ("1", "true", "yes"),
        "log_level": environ.get("ABC_CORE_LOG_LEVEL", "INFO").upper(),
        "contract_address": environ.get("ABC_CORE_CONTRACT_ADDRESS", DEFAULT_CONTRACT_ADDRESS),
    }


def main():
    settings = settings_from_env()
    logging.basicConfig(
        level=settings["log_level"],
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app = create_app(contract_address=settings["contract_address"])
    app.run(host=settings["host"], port=settings["port"], debug=settings["debug"])


if __name__ == "__main__":
    main()
