"""
Enrollment Analytics — Configuration: source URL, timeouts, header aliases, constants.
"""
import os

# ---------------------------------------------------------------------------
# Source: the Google Sheets CSV export the snapshot is rebuilt from
# ---------------------------------------------------------------------------
GOOGLE_SPREADSHEET_ID = os.environ.get(
    "GOOGLE_SPREADSHEET_ID", "1TggXSG9WbKut8PSD8f6_c3KNtFyFt49CSpnwIis_pBA"
)
GOOGLE_SHEET_GID = os.environ.get("GOOGLE_SHEET_GID", "542375196")
ENROLLMENT_CSV_URL = os.environ.get(
    "ENROLLMENT_CSV_URL",
    f"https://docs.google.com/spreadsheets/d/{GOOGLE_SPREADSHEET_ID}"
    f"/export?format=csv&gid={GOOGLE_SHEET_GID}",
)

# Total seconds (connect + download) before a source fetch raises FetchTimeoutError
FETCH_TIMEOUT_SECONDS = float(os.environ.get("FETCH_TIMEOUT_SECONDS", "10"))
FETCH_USER_AGENT = "EnrollmentAnalytics/1.0"

# ---------------------------------------------------------------------------
# API
# ---------------------------------------------------------------------------
_DEFAULT_ORIGINS = (
    "http://localhost:3000,http://localhost:5173,"
    "http://localhost:4173,http://localhost:4028"
)
CORS_ORIGINS = [o.strip() for o in os.environ.get("CORS_ORIGINS", _DEFAULT_ORIGINS).split(",") if o.strip()]

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

RECENT_DEFAULT_LIMIT = 50
LTV_DEFAULT_LIMIT = 50
SEARCH_RESULT_LIMIT = 20
ANALYTICS_RECORD_LIMIT = 100
TREND_MONTHS = 6

# ---------------------------------------------------------------------------
# Header aliases: canonical field → raw sheet headers, first non-empty wins
# ---------------------------------------------------------------------------
FIELD_ALIASES = {
    "student_name": ["Student Name", "Name", "Full Name"],
    "email": ["Email Address", "Email", "Student Email", "Contact Email"],
    "phone": ["WhatsApp Phone Number", "Phone", "Phone Number", "Contact Number"],
    "country_code": ["Country Code", "Country"],
    "address": ["Address", "Location"],
    "age": ["Age"],
    "gender": ["Gender"],
    "course": ["Package", "Course", "Course Name", "Program"],
    "category": ["Activity", "Category", "Course Category", "Program Type"],
    "enrollment_date": ["Start Date", "Enrollment Date", "Date", "Registration Date"],
    "timestamp": ["Timestamp", "Created Date"],
    "status": ["Status", "Enrollment Status"],
    "progress": ["Progress", "Completion %", "Completion Percentage"],
    "payment_status": ["Payment Status", "Payment", "Fee Status"],
    "fees_paid": ["Fees Paid Amount", "Amount Paid", "Paid Amount"],
    "fees_remaining": ["Fees Remaining Amount", "Remaining Amount", "Balance"],
    "amount": ["Amount", "Fee", "Course Fee", "Total Fee"],
    "schedule": ["Specify your Class Schedule", "Schedule", "Class Time"],
    "source": ["Source", "Lead Source", "Referral Source"],
}

# Plain string fields with a fixed fallback (None = per-row placeholder or derived)
FIELD_DEFAULTS = {
    "phone": "",
    "country_code": "",
    "address": "",
    "age": "",
    "gender": "",
    "course": "Unknown Course",
    "category": "General",
    "timestamp": "",
    "status": "Active",
    "schedule": "",
    "source": "Direct",
}

MONEY_FIELDS = ["fees_paid", "fees_remaining", "amount"]

# Characters stripped from money cells before parsing ("$1,200.00" → 1200.0)
CURRENCY_STRIP = ("$", ",")

ACTIVE_STATUS = "Active"
COMPLETED_STATUS = "Completed"
PAID_STATUS = "Paid"
PENDING_STATUS = "Pending"

# ---------------------------------------------------------------------------
# Dashboard presentation
# ---------------------------------------------------------------------------
KPI_CARDS = [
    # (metric key, title, icon, subtitle, format)
    ("totalEnrollments", "Total Enrollments", "Users", "From Google Sheets", "number"),
    ("activeStudents", "Active Students", "UserPlus", "Currently enrolled", "number"),
    ("completedCourses", "Completed Courses", "Award", "Successfully finished", "number"),
    ("avgProgress", "Average Progress", "TrendingUp", "Course completion", "percent"),
]

CATEGORY_COLORS = ["#3b82f6", "#10b981", "#f59e0b", "#ef4444", "#8b5cf6", "#06b6d4"]

# ---------------------------------------------------------------------------
# Export: (header, Enrollment JSON key); "Amount" is the paid value
# ---------------------------------------------------------------------------
EXPORT_COLUMNS = [
    ("Student Name", "studentName"),
    ("Email", "email"),
    ("Course", "course"),
    ("Category", "category"),
    ("Enrollment Date", "enrollmentDate"),
    ("Status", "status"),
    ("Payment Status", "paymentStatus"),
    ("Amount", "paidValue"),
]
EXPORT_FILENAME = "enrollments"
