import sys

from causal_dashboard.config.dashboard_config import load_config
from causal_dashboard.controllers.system_controller import SystemController


def main():
    """Causal dashboard entry point. Optional argument: path to a YAML config."""
    config = load_config(sys.argv[1]) if len(sys.argv) > 1 else None

    controller = SystemController(config)

    controller.initiate_view("tkinter")

if __name__ == "__main__":
    main()
