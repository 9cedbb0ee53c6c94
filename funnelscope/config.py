import os
from pathlib import Path
from dotenv import load_dotenv

# Paths
PACKAGE_ROOT = Path(__file__).resolve().parent          # .../funnelscope/funnelscope
REPO_ROOT = PACKAGE_ROOT.parent                         # .../funnelscope

load_dotenv(REPO_ROOT / ".env")

DATA_DIR = Path(os.getenv("FUNNELSCOPE_DATA_DIR", str(PACKAGE_ROOT / "data"))).expanduser()


# App
APP_TITLE = "Funnelscope Prospect API"
APP_VERSION = "0.3.0"

# Funnel math
DAYS_PER_MONTH = 30          # fixed 30-day month for spend projections
ROI_HEALTHY = 2.0            # roi >= 2.0x
ROI_BREAK_EVEN = 1.0         # 1.0x <= roi < 2.0x

# Generic stage names when neither the prospect nor its funnel type names a stage
GENERIC_STAGE_NAMES = {
    "stage1": "Registration",
    "stage2": "Attendance",
    "stage3": "Call Booking",
    "stage4": "Call Attendance",
}

# Scaling plan defaults
DEFAULT_SCALING_INCREMENT_PERCENT = 20.0
DEFAULT_SCALING_FREQUENCY_DAYS = 3

# Pipeline statuses (display labels)
STATUS_LABELS = {
    "new":            "New",
    "contacted":      "Contacted",
    "call_scheduled": "Call Scheduled",
    "call_completed": "Call Done",
    "proposal_sent":  "Proposal Sent",
    "won":            "Won",
    "lost":           "Lost",
}
CLOSED_STATUSES = ("won", "lost")

ALLOW_ORIGINS = [o.strip() for o in os.getenv(
    "FUNNELSCOPE_ALLOW_ORIGINS",
    "http://localhost,http://localhost:5173,http://127.0.0.1:8000",
).split(",") if o.strip()]

# Optional algo/version tagging for responses
ALGO_VERSION = "0.3.0-funnel"
