from .view_request_interpreter import ViewRequestInterpreter
from ...utils.logger.logger import Logger


# MANAGES VIEW REQUESTS AND CONTROLS VIEW STRATEGY
class ViewManager:
    """Handles view requests by selecting and managing the appropriate view strategy."""

    def __init__(self, controller):
        Logger.log(f"start ViewManager __init__(self, {controller})")
        self.view_request_interpreter = ViewRequestInterpreter()
        self.view_strategy = None
        Logger.log(f"end ViewManager __init__(self, controller)")

    def initiate_view_strategy(self, view, controller):
        """
        Select a view for the request, stop the current one, and start the new one.

        Raises:
            ValueError: If the view request is invalid.
        """
        Logger.log(f"start initiate_view_strategy(self, {view}, controller)")
        new_view_strategy = self.view_request_interpreter.get_view_strategy(view, controller)
        Logger.log(f"Selected view strategy: {new_view_strategy}")

        if self.view_strategy:
            Logger.log("Stopping current view strategy before switching.")
            self.view_strategy.stop_view()

        self.view_strategy = new_view_strategy
        Logger.log("Starting new view strategy.")
        self.view_strategy.start_view()
        Logger.log(f"end initiate_view_strategy(self, view, controller)")
        return self.view_strategy
