"""Calendar view schemas."""

from datetime import date

from pydantic import BaseModel


class CalendarLocale(BaseModel):
    """Month and day names used to render the calendar."""

    model_config = {"frozen": True}

    code: str
    month_names: list[str]
    month_names_short: list[str]
    day_names: list[str]
    day_names_short: list[str]
    today: str


SPANISH = CalendarLocale(
    code="es",
    month_names=[
        "Enero", "Febrero", "Marzo", "Abril", "Mayo", "Junio",
        "Julio", "Agosto", "Septiembre", "Octubre", "Noviembre", "Diciembre",
    ],
    month_names_short=[
        "Ene", "Feb", "Mar", "Abr", "May", "Jun",
        "Jul", "Ago", "Sep", "Oct", "Nov", "Dic",
    ],
    day_names=["Domingo", "Lunes", "Martes", "Miércoles", "Jueves", "Viernes", "Sábado"],
    day_names_short=["Dom", "Lun", "Mar", "Mié", "Jue", "Vie", "Sáb"],
    today="Hoy",
)  # fmt: skip

ENGLISH = CalendarLocale(
    code="en",
    month_names=[
        "January", "February", "March", "April", "May", "June",
        "July", "August", "September", "October", "November", "December",
    ],
    month_names_short=[
        "Jan", "Feb", "Mar", "Apr", "May", "Jun",
        "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
    ],
    day_names=["Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"],
    day_names_short=["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"],
    today="Today",
)  # fmt: skip

LOCALES: dict[str, CalendarLocale] = {locale.code: locale for locale in (SPANISH, ENGLISH)}


class MarkedDate(BaseModel):
    """Marking for a calendar day that has appointments."""

    marked: bool = True
    selected: bool = True
    selected_color: str = "lightpink"


class CalendarResponse(BaseModel):
    """Calendar marks plus the locale to render them with."""

    locale: CalendarLocale
    marked_dates: dict[date, MarkedDate]
