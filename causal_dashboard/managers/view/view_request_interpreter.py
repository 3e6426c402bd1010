from ...views.headless_view.headless_view import HeadlessView
from ...views.tkinter_view.optional_gui_loader import get_gui_view_class
from ...utils.logger.logger import Logger


# INTERPRETS VIEW REQUESTS AND RETURNS APPROPRIATE VIEW STRATEGY
class ViewRequestInterpreter:
    """
    Handles view requests by selecting and returning the appropriate view strategy.
    """

    def __init__(self):
        Logger.log(f"start ViewRequestInterpreter __init__(self)")
        Logger.log(f"end ViewRequestInterpreter __init__(self)")

    def get_view_strategy(self, view_request, controller):
        """
        Determines and returns the appropriate view strategy based on the provided request.

        Args:
            view_request (str): "tkinter" or "headless".

        Returns:
            TkinterView or HeadlessView: An instance of the selected view class.

        Raises:
            ValueError: If the request is unknown, or Tkinter is requested but unavailable.
        """
        Logger.log(f"start get_view_strategy(self, {view_request}, {controller})")
        request = view_request.lower()

        if request == "headless":
            Logger.log("Headless view strategy selected.")
            return HeadlessView(controller)

        elif request == "tkinter":
            tkinter_view_class = get_gui_view_class()
            if tkinter_view_class is None:
                Logger.log("ValueError: Tkinter view requested but unavailable.", Logger.LogPriority.ERROR)
                raise ValueError("Tkinter view is not available in this environment.")
            Logger.log("Tkinter view strategy selected.")
            return tkinter_view_class(controller)

        else:
            Logger.log("ValueError: Invalid view request. Choose 'tkinter' or 'headless'.", Logger.LogPriority.ERROR)
            raise ValueError("Invalid view request. Choose 'tkinter' or 'headless'.")
