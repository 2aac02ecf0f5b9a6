APP_NAME = "Jiceot"
DB_FILE = "jiceot.db"
DUE_SOON_DAYS = 7
DASHBOARD_UPCOMING_LIMIT = 5
MAX_ANCHOR_DAY = 31

KIND_BILL = "bill"
KIND_EXPENSE = "expense"
OBLIGATION_KINDS = [KIND_BILL, KIND_EXPENSE]

STATUS_OVERDUE = "overdue"
STATUS_DUE_SOON = "due_soon"
STATUS_UPCOMING = "upcoming"

# Label shown once the viewed period is completed.
COMPLETED_LABELS = {
    KIND_BILL: "Paid",
    KIND_EXPENSE: "Created",
}

# Form routes and the query key naming the type, per kind.
PREFILL_ROUTES = {
    KIND_BILL: ("/bill-payments/new", "bill_type_id"),
    KIND_EXPENSE: ("/expense-items/new", "expense_type_id"),
}
