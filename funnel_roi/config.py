from pathlib import Path

# Paths
PACKAGE_ROOT = Path(__file__).resolve().parent          # .../funnel_roi
TEMPLATE_DIR = PACKAGE_ROOT / "templates"


# --- Single source of truth for calendar math ---
DAYS_PER_MONTH = 30
MONTHS_PER_YEAR = 12
PROJECTION_MONTHS = 12

# Max acceptable cost to acquire a client = lifetime value / 3
ACQUISITION_CEILING_DIVISOR = 3.0

# Absolute buffer (in clients) for on_track vs behind
GOAL_BUFFER = 0.5

DEFAULT_TEMPLATE = "full"

# Rate field -> (forward volume, required volume, display label)
STAGES = {
    "landing_page_conversion": ("leads",           "est_leads",           "Leads"),
    "discovery_call_rate":     ("discovery_calls", "est_discovery_calls", "Discovery Calls"),
    "sales_call_rate":         ("sales_calls",     "est_sales_calls",     "Sales Calls"),
    "proposal_rate":           ("proposals_sent",  "est_proposals",       "Proposals"),
    "client_won_rate":         ("new_clients",     None,                  "New Clients"),
}
FIRST_STAGE = "landing_page_conversion"
LAST_STAGE = "client_won_rate"
MIN_STAGES, MAX_STAGES = 3, 5

# Fields stored as 0..100
PERCENT_FIELDS = tuple(STAGES.keys())

# Budget scaling preview
SCALING_STEPS = [0.20, 0.50]
CPC_VARIANTS = [("flat CPC", 0.00), ("CPC +10%", 0.10), ("CPC +20%", 0.20)]
