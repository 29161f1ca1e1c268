# Business tables for solar quotations (Indian market)

# Government subsidy per capacity bracket: (upper_bound_kw_inclusive, amount_inr)
SUBSIDY_TIERS = [
    (1, 30000),
    (2, 60000),
    (10, 78000),
]
SUBSIDY_PROPERTY_TYPES = {"residential"}
SUBSIDY_PROJECT_TYPES = {"on_grid", "hybrid"}

DEFAULT_GST_PERCENTAGE = 18

# Rate per kW (before GST) used when no projectValue is supplied
DEFAULT_RATE_PER_KW = {
    "on_grid": 68000,
    "off_grid": 85000,
    "hybrid": 95000,
}
WATER_HEATER_RATE_PER_LITRE = 350
WATER_PUMP_RATE_PER_HP = 45000

# Configuration defaults
DEFAULT_PANEL_WATTS = 530
DEFAULT_PUMP_PANEL_WATTS = 540
DEFAULT_PUMP_PANEL_COUNT = 10
DEFAULT_BATTERY_AH = "100"
DEFAULT_BATTERY_VOLTAGE = 12
DEFAULT_WATER_HEATER_LITRES = 100

# Battery backup
BACKUP_WATTS_PER_AH = 10
BACKUP_SYSTEM_LOSS = 0.03
DEFAULT_USAGE_WATTS = [800, 750, 550, 450, 200]

# Cabling: base metres and the kW/kVA above which they double
DC_CABLE_METERS = 20
AC_CABLE_METERS = 15
CABLE_DOUBLING_THRESHOLD_KW = 10

STRUCTURE_MATERIAL = {
    "gp_structure": "GI",
    "mono_rail": "Aluminium",
    "gi_structure": "GI",
    "gi_round_pipe": "GI",
    "ms_square_pipe": "MS",
}

STRUCTURE_DISPLAY_NAME = {
    "gp_structure": "GP Structure",
    "mono_rail": "Mono Rail",
    "gi_structure": "GI Structure",
    "gi_round_pipe": "GI Round Pipe",
    "ms_square_pipe": "MS Square Pipe",
}

PANEL_TYPE_DISPLAY = {
    "topcon": "Topcon",
    "mono_perc": "Mono-PERC",
}
DEFAULT_PANEL_TYPE_DISPLAY = "Bifacial"
DEFAULT_PANEL_MAKE = "Gautam / Premier"
DEFAULT_INVERTER_MAKE = "Growatt/Eastman/polycab"

BATTERY_BRAND_DISPLAY = {
    "exide": "Exide",
    "utl": "UTL",
    "exide_utl": "Exide/UTL",
}
BATTERY_TYPE_SHORT = {
    "lithium": "Li-ion",
    "lead_acid": "LA",
}
BATTERY_TYPE_LONG = {
    "lead_acid": "Lead Acid Battery",
    "lithium": "Lithium Battery",
}

PROJECT_TYPE_DISPLAY = {
    "on_grid": "On-Grid",
    "off_grid": "Off-Grid",
    "hybrid": "Hybrid",
    "water_heater": "Water Heater",
    "water_pump": "Water Pump",
}

DELIVERY_TIMEFRAME_TEXT = {
    "1_2_weeks": "1-2 Weeks from the date of confirmation of order",
    "2_3_weeks": "2-3 Weeks from the date of confirmation of order",
    "3_4_weeks": "3-4 Weeks from the date of confirmation of order",
    "1_month": "1 Month from the date of confirmation of order",
    "2_months": "2 Months from the date of confirmation of order",
}
DEFAULT_DELIVERY_TEXT = DELIVERY_TIMEFRAME_TEXT["2_3_weeks"]

DEFAULT_QUOTE_VALIDITY_DAYS = 7
DEFAULT_ADVANCE_PERCENTAGE = 90

COMPANY_DETAILS = {
    "name": "Prakash Green Energy",
    "logo": "/assets/company-logo.png",
    "contact": {
        "phone": ["6374901500", "9585557516", "8925840511"],
        "email": "support@prakashgreenenergy.com",
        "website": "www.prakashgreenenergy.com",
        "address": "14 R, N.S. Konar Street, Jaihindpuram, Madurai, Tamilnadu, India - 625 011",
    },
}

DEFAULT_BANK_DETAILS = {
    "name": "Prakash Green Energy",
    "bank": "ICICI",
    "branch": "Sobramaniyapuram Madurai",
    "account_no": "067005013400",
    "ifsc_code": "ICIC0000670",
}

DEFAULT_PREPARED_BY = "SM"
DEFAULT_CONTACT_PERSON = "M. Selva Prakash"
DEFAULT_CONTACT_NUMBER = "+91 99949 01500"

DEFAULT_SUBSIDY_DOCUMENTS = [
    "1) EB Number",
    "2) EB Register Mobile Number",
    "3) Aadhaar Card",
    "4) Aadhar Card",
    "5) Pan Card",
    "6) Passport Size Photo -1",
    "7) Photo of EB Tax Copy",
    "8) Passport",
    "9) Cancelled Cheque",
]
DEFAULT_DOCUMENTS_NOTE = "*All Required Documents should be in the same name as mention EB Service Number"

# Warranty period enum -> text
WARRANTY_PERIOD_TEXT = {
    "1_year": "1 Year",
    "2_years": "2 Years",
    "5_years": "5 Years",
    "10_years": "10 Years",
    "25_years": "25 Years",
}

# Utility products: (warranty key, label, default period)
UTILITY_WARRANTY_COMPONENTS = {
    "water_heater": [
        ("heater", "Solar Water Heater", "5_years"),
        ("installation", "Installation", "1_year"),
    ],
    "water_pump": [
        ("pump", "Solar Water Pump", "2_years"),
        ("panel", "Solar (PV)Panel Modules", "25_years"),
        ("installation", "Installation", "1_year"),
    ],
}
