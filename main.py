from PyQt6.QtWidgets import QApplication
import argparse
import logging
import sys

from config.logging_config import LOG_FORMAT, configure_logging
from controllers.master_controller import MasterController


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="Interactive 3D diagram of a neural-network layer stack",
        epilog=f"Log lines: {LOG_FORMAT}",
    )
    parser.add_argument(
        "--layers",
        type=str,
        default=None,
        help="Diagram JSON file to open at startup (default: built-in example network)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        help="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )
    parser.add_argument(
        "--log-file",
        type=str,
        default=None,
        help="Optional UTF-8 log file, same lines as the console",
    )
    # Les options Qt (-platform, -style...) restent pour QApplication
    args, _ = parser.parse_known_args(argv)
    return args


if __name__ == "__main__":
    args = parse_args()
    configure_logging(args.log_level, args.log_file)
    logging.getLogger(__name__).info("Démarrage du visualiseur")

    app = QApplication(sys.argv)

    # Créer le contrôleur principal
    master_controller = MasterController(initial_path=args.layers)

    # Démarrer l'application
    master_controller.run()

    sys.exit(app.exec())
