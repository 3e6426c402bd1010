from ...utils.logger.logger import Logger


def get_gui_view_class():
    """Return TkinterView, or None when tkinter cannot be imported."""
    try:
        from .tkinter_view import TkinterView
        Logger.log("TkinterView successfully loaded.", Logger.LogPriority.DEBUG)
        return TkinterView
    except ImportError as e:
        Logger.log(f"Tkinter not available: {e}", Logger.LogPriority.WARNING)
        return None
