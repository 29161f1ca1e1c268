import logging
import random
from datetime import date

from solar_quote.constants import (
    COMPANY_DETAILS,
    DEFAULT_ADVANCE_PERCENTAGE,
    DEFAULT_BANK_DETAILS,
    DEFAULT_CONTACT_NUMBER,
    DEFAULT_CONTACT_PERSON,
    DEFAULT_DELIVERY_TEXT,
    DEFAULT_DOCUMENTS_NOTE,
    DEFAULT_PANEL_WATTS,
    DEFAULT_PREPARED_BY,
    DEFAULT_QUOTE_VALIDITY_DAYS,
    DEFAULT_SUBSIDY_DOCUMENTS,
    DELIVERY_TIMEFRAME_TEXT,
    PROJECT_TYPE_DISPLAY,
    STRUCTURE_DISPLAY_NAME,
    UTILITY_WARRANTY_COMPONENTS,
    WARRANTY_PERIOD_TEXT,
)
from solar_quote.models import (
    Alert,
    BankDetails,
    BomSummary,
    CompanyDetails,
    CustomerDetails,
    CustomerScope,
    DetailedWarrantyTerms,
    DocumentChecklist,
    PaymentDetails,
    QuotationTemplate,
    ScopeOfWork,
    TermsAndConditions,
)
from solar_quote.services.backup_service import calculate_backup_solutions
from solar_quote.services.bom_service import generate_bill_of_materials
from solar_quote.services.capacity_service import calculate_system_kw, format_kw_for_display
from solar_quote.services.descriptions import battery_dc_volt, drive_hp_text, inverter_kva_text
from solar_quote.services.pricing_service import calculate_pricing_breakdown
from solar_quote.utils import parse_leading_int

_logger = logging.getLogger(__name__)

COMPANY_SCOPE = "company_scope"


def generate_quotation_number(today=None) -> str:
    """Q-<month>-<4 digit sequence>, e.g. Q-04-1052."""
    today = today or date.today()
    return f"Q-{today.month:02d}-{random.randint(1000, 9999)}"


# --- Scope of work ---

def _floor_text(floor, show_ground: bool) -> str:
    if floor is None:
        return ""
    if floor == "0":
        return " (Ground Floor)" if show_ground else ""
    suffix = {"1": "st", "2": "nd", "3": "rd"}.get(floor, "th")
    return f" ({floor}{suffix} Floor)"


def _rooftop_structure_lines(project, show_ground_floor: bool, floor_on_gp_heights: bool) -> list:
    if not project.structure_type:
        return []

    name = STRUCTURE_DISPLAY_NAME.get(project.structure_type, project.structure_type)
    floor = _floor_text(project.floor, show_ground_floor)
    lines = ["1) Structure:"]

    if project.structure_type == "mono_rail" and project.mono_rail:
        rail = "Mini Rail" if project.mono_rail.type == "mini_rail" else "Long Rail"
        lines.append(f"   • For flat roofing, {name} - {rail}, South facing slant mounting{floor}")
    elif project.gp_structure:
        lower = project.gp_structure.lower_end_height or "0"
        higher = project.gp_structure.higher_end_height or "0"
        lines.append(
            f"   • For flat roofing, South facing slant mounting of lower end height is {lower} feet "
            f"& {higher} feet at higher end{floor if floor_on_gp_heights else ''}"
        )
    else:
        lines.append(f"   • For flat roofing, {name}, South facing slant mounting{floor}")
    return lines


def _scope(value) -> str:
    return value or "customer_scope"


def generate_scope_of_work(project) -> ScopeOfWork:
    """
    Company-side and customer-side work items. Civil work, net meter, electrical
    work and plumbing each land on exactly one side according to their *_scope flag.
    """
    structure, net_meter, electrical, plumbing = [], [], [], []
    customer = {"civil_work": [], "net_bi_directional_meter": [], "electrical_work": [], "plumbing_work": []}
    project_type = project.project_type

    if project_type == "on_grid":
        structure += _rooftop_structure_lines(project, show_ground_floor=True, floor_on_gp_heights=True)

        if _scope(project.civil_work_scope) == COMPANY_SCOPE:
            structure.append("   • Civil work including earth pit construction (Company Scope)")
        else:
            customer["civil_work"] += [
                "1) Civil work:",
                "   • Earth pit digging.",
                "   • 1 feet chamber and concrete (for Structure)",
            ]

        if _scope(project.net_meter_scope) == COMPANY_SCOPE:
            net_meter += [
                "2) Net (Bi-directional) Meter:",
                "   • We will take the responsibility of applying to EB and all charges (Company Scope)",
            ]
        else:
            customer["net_bi_directional_meter"] += [
                "2) Net (Bi-directional) Meter:",
                "   • We will take the responsibility of applying to EB at Customer's Expense",
                "   • Application and Installation charges for net meter to be paid by Customer.",
            ]

    elif project_type == "off_grid":
        structure += [
            "1) Structure:",
            "   • For flat roofing, South facing slant mounting of lower end height is 3 Feet & 4 Feet at taller end.",
            "   • For sheet roofing, panels will be placed on the roof with rail structure.",
            "   • For other kinds of roofing, the structure will vary.",
        ]
        if project.amc_included:
            structure += [
                "2) Annual Maintenance:",
                "   • We give 1 year of free service, which includes 4 quarterly services.",
                "   • We offer annual maintenance contract starting from the second year of installation "
                "as per customer choice on chargeable basis.",
            ]
        # Training follows AMC when there is one
        training_number = 3 if project.amc_included else 2
        structure += [f"{training_number}) Training:", "   • We provide hands on training to end user."]

        if _scope(project.civil_work_scope) == COMPANY_SCOPE:
            structure.append("   • Civil work including earth pit construction (Company Scope)")
        else:
            customer["civil_work"] += ["1) Civil work:", "   • Patch works after installation.", "   • Earth pit digging."]

        customer["electrical_work"] += [
            "2) Outgoing Electrical Wiring:",
            "   • From ACDB / Outgoing MCB to existing house wiring (if necessary).",
        ]
        customer["plumbing_work"] += [
            "3) Transport:",
            "   • Will be claimed at actuals from the customer.",
            "4) Cables & Accessories:",
            "   • Extra will be charged for any material exceeding those mentioned in the bill of materials.",
        ]

    elif project_type == "hybrid":
        structure += _rooftop_structure_lines(project, show_ground_floor=False, floor_on_gp_heights=False)

        if _scope(project.net_meter_scope) == COMPANY_SCOPE:
            net_meter += [
                "2) Net Meter:",
                "   • We will take the responsibility of applying to EB and all charges (Company Scope)",
            ]
        else:
            customer["net_bi_directional_meter"] += [
                "2) Net (Bi-directional) Meter:",
                "   • We will take the responsibility of applying to EB at customer's expenses.",
                "   • Application and Installation charges for net meter to be paid by Customer.",
            ]

        if _scope(project.electrical_work_scope) == COMPANY_SCOPE:
            electrical += ["3) Electrical Work:", "   • All electrical wiring and accessories (Company Scope)"]
        else:
            customer["electrical_work"] += ["3) Electrical Work:", "   • Basic electrical wiring to be provided by Customer"]

        if _scope(project.civil_work_scope) == COMPANY_SCOPE:
            structure.append("   • Civil work including earth pit construction (Company Scope)")
        else:
            customer["civil_work"] += ["1) Civil work:", "   • Earth pit digging.", "   • 1 Feet chamber with concrete."]

    elif project_type == "water_pump":
        if _scope(project.plumbing_work_scope) == COMPANY_SCOPE:
            plumbing += ["2) Plumbing Work:", "   • All plumbing work including pipe fittings (Company Scope)"]
        else:
            customer["plumbing_work"] += [
                "2) Plumbing Work:",
                "   • Plumbing connections and pipe work to be provided by Customer",
            ]

        if _scope(project.civil_work_scope) == COMPANY_SCOPE:
            structure.append("   • Civil work including foundation and mounting (Company Scope)")
        else:
            customer["civil_work"] += ["1) Civil work:", "   • Foundation and mounting base to be provided by Customer"]

    elif project_type == "water_heater":
        structure += [
            "   • Installation and mounting on roof/terrace (Company Scope)",
            "   • Piping work up to 15 feet included",
        ]
        customer["civil_work"] += [
            "1) Additional Work:",
            "   • Any additional piping beyond 15 feet to be paid by Customer",
            "   • Roof reinforcement if required to be done by Customer",
        ]

    return ScopeOfWork(
        structure=structure,
        net_bi_directional_meter=net_meter,
        electrical_work=electrical,
        plumbing_work=plumbing,
        customer_scope=CustomerScope(**customer),
    )


# --- Terms and conditions ---

def _utility_warranty_lines(project) -> list:
    lines = []
    components = UTILITY_WARRANTY_COMPONENTS[project.project_type]
    for number, (key, label, default_period) in enumerate(components, start=1):
        period = project.warranty.get(key) or default_period
        text = WARRANTY_PERIOD_TEXT.get(period, period)
        lines.append(f"{number}. {label} ({text})")
        lines.append(f"   • Warranty for {text}")
    return lines


def generate_warranty_details(quotation, project) -> list:
    details = []
    exclusions = quotation.physical_damage_exclusions
    if exclusions and exclusions.enabled:
        details.append(exclusions.disclaimer_text)

    project_type = project.project_type
    if project_type == "off_grid":
        details += [
            "1. Solar (PV)Panel Modules (10-15 Years)",
            "   • 10 Years Manufacturing defect Warranty",
            "   • 15 Years performance Warranty",
            "   • 90% Performance Warranty till the end of 10 years",
            "   • 80% Performance Warranty till the end of 15 years",
            "2. Solar Off grid Inverter (2 Years)",
            "   • Replacement Warranty for 2 Years",
            "3. Solar Battery (5 Years)",
            "   • Replacement Warranty for 5 Years",
        ]
    elif project_type == "hybrid":
        details += [
            "1. Solar (PV)Panel Modules (30 Years)",
            "   • 15 Years Manufacturing defect Warranty",
            "   • 15 Years performance Warranty",
            "   • 90% Performance Warranty till the end of 15 years",
            "   • 80% Performance Warranty till the end of 15 years",
            "2. Solar Hybrid Inverter (5 Years)",
            "   • Warranty for 5 Years",
            "3. Solar Battery (5 Years)",
            "   • Replacement Warranty for 3 Years",
            "   • Service Warranty for 2 years",
        ]
    elif project_type in UTILITY_WARRANTY_COMPONENTS:
        details += _utility_warranty_lines(project)
    else:
        terms = quotation.detailed_warranty_terms or DetailedWarrantyTerms()
        if terms.solar_panels:
            details.append("1. Solar (PV)Panel Modules (30 Years)")
            details.append(f"   • {terms.solar_panels.manufacturing_defect}")
            details.append(f"   • {terms.solar_panels.service_warranty}")
            details += [f"   • {item}" for item in terms.solar_panels.performance_warranty]
        if terms.inverter:
            details.append("2. Solar On grid Inverter (15 Years)")
            details.append(f"   • {terms.inverter.replacement_warranty}")
            details.append(f"   • {terms.inverter.service_warranty}")
    return details


def generate_bank_details(quotation) -> BankDetails:
    account = quotation.account_details
    if account is None:
        return BankDetails(**DEFAULT_BANK_DETAILS)
    return BankDetails(
        name=account.account_holder_name or DEFAULT_BANK_DETAILS["name"],
        bank=account.bank_name or DEFAULT_BANK_DETAILS["bank"],
        branch=account.branch or DEFAULT_BANK_DETAILS["branch"],
        account_no=account.account_number or DEFAULT_BANK_DETAILS["account_no"],
        ifsc_code=account.ifsc_code or DEFAULT_BANK_DETAILS["ifsc_code"],
    )


def delivery_period_text(timeframe) -> str:
    return DELIVERY_TIMEFRAME_TEXT.get(timeframe, DEFAULT_DELIVERY_TEXT)


def generate_terms_and_conditions(quotation, project) -> TermsAndConditions:
    advance = quotation.advance_payment_percentage or DEFAULT_ADVANCE_PERCENTAGE
    return TermsAndConditions(
        warranty_details=generate_warranty_details(quotation, project),
        payment_details=PaymentDetails(
            advance_percentage=advance,
            balance_percentage=100 - advance,
            bank_details=generate_bank_details(quotation),
        ),
        delivery_period=delivery_period_text(quotation.delivery_timeframe),
    )


def generate_document_checklist(quotation) -> DocumentChecklist:
    requirements = quotation.document_requirements
    if requirements is None:
        return DocumentChecklist(list=list(DEFAULT_SUBSIDY_DOCUMENTS), note=DEFAULT_DOCUMENTS_NOTE)
    return DocumentChecklist(
        list=[f"{number}) {doc}" for number, doc in enumerate(requirements.subsidy_documents, start=1)],
        note=requirements.note or DEFAULT_DOCUMENTS_NOTE,
    )


# --- Header fields ---

def quote_validity_days(quotation_date: date, valid_until) -> int:
    if valid_until is None:
        return DEFAULT_QUOTE_VALIDITY_DAYS
    return (valid_until - quotation_date).days


def generate_reference(project, pricing) -> str:
    if project.project_type == "water_heater":
        return f"{project.litre} LPD Solar Water Heater"
    if project.project_type == "water_pump":
        return f"{drive_hp_text(project)} HP Solar Water Pump"
    kw = pricing.kw if pricing else 0
    display = PROJECT_TYPE_DISPLAY.get(project.project_type, "Solar")
    return f"{format_kw_for_display(kw)} kW {display} Solar Power Generation System"


def generate_bom_summary(project):
    if project.project_type not in ("on_grid", "off_grid", "hybrid"):
        return None

    phase = "3" if project.inverter_phase == "three_phase" else "1"
    total_panel_watts = parse_leading_int(project.panel_watts, DEFAULT_PANEL_WATTS) * (project.panel_count or 1)

    if project.project_type == "on_grid":
        kw = calculate_system_kw(project.panel_watts, project.panel_count)
        return BomSummary(phase=phase, inverter_kw=project.inverter_kw or kw, panel_watts=total_panel_watts)

    return BomSummary(
        phase=phase,
        inverter_kva=inverter_kva_text(project),
        panel_watts=total_panel_watts,
        battery_ah=project.battery_ah,
        dc_volt=battery_dc_volt(project),
    )


def generate_quotation_template(project, customer, quotation, quotation_date=None, prepared_by_name=None):
    """
    Builds the complete, immutable quotation document for one project.
    A changed configuration means building a new template.
    """
    quotation_date = quotation_date or date.today()
    alerts = []

    pricing = calculate_pricing_breakdown(project, customer.property_type)

    if quotation.custom_bill_of_materials:
        _logger.info(
            "Quotation %s uses a custom bill of materials (%d rows)",
            quotation.quotation_number, len(quotation.custom_bill_of_materials),
        )
        bill_of_materials = list(quotation.custom_bill_of_materials)
    else:
        bill_of_materials = generate_bill_of_materials(project, alerts)

    backup = None
    if project.project_type in ("off_grid", "hybrid"):
        backup = calculate_backup_solutions(project)

    return QuotationTemplate(
        header=CompanyDetails.model_validate(COMPANY_DETAILS),
        quotation_number=quotation.quotation_number or generate_quotation_number(quotation_date),
        quotation_date=quotation_date.strftime("%d/%m/%Y"),
        quote_revision=quotation.document_version or 1,
        quote_validity=f"{quote_validity_days(quotation_date, quotation.valid_until)} Days",
        prepared_by=prepared_by_name or quotation.prepared_by or DEFAULT_PREPARED_BY,
        ref_name=quotation.ref_name or None,
        contact_person=quotation.contact_person or DEFAULT_CONTACT_PERSON,
        contact_number=quotation.contact_number or DEFAULT_CONTACT_NUMBER,
        project_type=project.project_type,
        floor=project.floor,
        customer=CustomerDetails(
            name=customer.name,
            address=customer.address,
            contact_number=customer.mobile,
            eb_service_number=customer.eb_service_number,
            tariff_code=customer.tariff_code,
            eb_sanction_phase=customer.eb_sanction_phase,
            eb_sanction_kw=customer.eb_sanction_kw,
        ),
        reference=generate_reference(project, pricing),
        pricing_breakdown=pricing,
        bom_summary=generate_bom_summary(project),
        backup_solutions=backup,
        bill_of_materials=bill_of_materials,
        terms_and_conditions=generate_terms_and_conditions(quotation, project),
        scope_of_work=generate_scope_of_work(project),
        documents_required_for_subsidy=generate_document_checklist(quotation),
        alerts=[Alert(**alert) for alert in alerts],
    )
