from ...utils.logger.logger import Logger


class ViewStrategy():
    """
    Base class for the ways the dashboard can be presented.
    Subclasses drive the controller and render its snapshots.
    """

    def __init__(self, controller):
        """
        Parameters:
        controller (SystemController): The controller the view acts through.
        """
        Logger.log(f"start ViewStrategy __init__(self, {controller})")
        self.controller = controller
        Logger.log(f"end ViewStrategy __init__(self, controller)")

    # STARTS THE VIEW
    def start_view(self):
        """
        Starts the view, initializing necessary resources or display mechanisms.

        Raises:
        NotImplementedError: If not implemented in a subclass.
        """
        raise NotImplementedError()

    # STOPS THE VIEW
    def stop_view(self):
        """
        Stops the view, releasing resources or hiding the display.

        Raises:
        NotImplementedError: If not implemented in a subclass.
        """
        raise NotImplementedError()
