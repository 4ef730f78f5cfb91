"""
UI adapters for the table browser.

Currently provides a Dash-based web UI via create_dash_app().
The UI only renders ViewResults and calls TableSession operations; all view
logic lives in table_browser.core.
"""
