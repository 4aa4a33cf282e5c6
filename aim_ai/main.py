# aim_ai/main.py
import logging

import flet as ft

from aim_ai.config import load_config
from aim_ai.log_setup import setup_logging
from aim_ai.ui.flet_app import make_target

logger = logging.getLogger(__name__)


def run_app():
    # handler first, so warnings raised while reading the config are formatted too
    setup_logging()
    config = load_config()
    setup_logging(config.log_level)

    target = make_target(config)
    if config.web:
        logger.info("Serving Aim AI in the browser")
        ft.run(target, view=ft.AppView.WEB_BROWSER)
    else:
        ft.run(target)


if __name__ == "__main__":
    run_app()
