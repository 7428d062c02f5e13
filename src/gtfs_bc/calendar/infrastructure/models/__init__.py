from .calendar_model import CalendarModel, CalendarDateModel

__all__ = ["CalendarModel", "CalendarDateModel"]
