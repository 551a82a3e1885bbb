from . import auth, calendar, dashboard, locations, sleep_entries

routers = [
    auth.router,
    locations.router,
    sleep_entries.router,
    dashboard.router,
    calendar.router,
]
