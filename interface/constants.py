"""Interface-level constants for the fitdb CLI/TUI."""

APP_TITLE = "fitdb"

TAB_LABELS = (
    ("home", "Home", "Alt+h"),
    ("topics", "Topics", "Alt+e"),
    ("add", "Add", "Alt+a"),
)

HOME_LINES = [
    "",
    "Welcome",
    "",
    "to",
    "",
    APP_TITLE,
    "",
    "Track topics and the items inside them, one-shot or recurring.",
    "",
    "Alt+e  topics     Alt+a  add an item     Alt+h  this screen",
    "Enter  update the selected item          Alt+d  delete the selection",
    "Ctrl+q quit",
]

ADD_HELP_LINES = [
    "Fill out the form to the left",
    "until all the text in the boxes turns green.",
    "",
    "Topic and Item cannot be blank.",
    "The rest show which values are allowed next to their names.",
    "A one-shot item has # Completed 1 at 100% and 0 below it.",
    "",
    "Press Enter when you are done with a box to move to the next one.",
    "Press Esc to go back one box.",
    "",
    "When everything is green, press Enter at the last box",
    "to add your new item.",
]

ADD_READY_LINES = [
    "",
    "Everything is in order!",
    "",
    "Confirm your item by pressing Enter when the last box is selected.",
    "",
    "You can see your new addition on the Topics screen (Alt+e).",
]

FOOTER_HINTS = {
    "home": "Alt+e topics • Alt+a add • Ctrl+q quit",
    "topic_list": "↑↓ select topic • → items • Alt+d delete topic • Alt+a add • Ctrl+q quit",
    "item_list": "↑↓ select item • ← topics • Enter update progress • Alt+d delete item • Ctrl+q quit",
    "add": "type to fill • Enter next/submit • Esc previous box • Alt+e topics • Ctrl+q quit",
    "update_progress": "← -1% • → +1% • Tab finish once • Enter save • Esc discard",
    "confirm_delete": "Enter delete • Esc cancel",
}

ITEM_COLUMNS = (
    ("ID", 4),
    ("Name", 18),
    ("Progress", 12),
    ("Recur", 5),
    ("Status", 6),
    ("%", 4),
    ("#", 4),
    ("Days", 5),
    ("Created", 19),
)
