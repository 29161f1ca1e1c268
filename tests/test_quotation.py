from datetime import date

from solar_quote.models import (
    AccountDetails,
    BillOfMaterialsItem,
    Customer,
    DocumentRequirements,
    GPStructure,
    HybridProject,
    MonoRail,
    OffGridProject,
    OnGridProject,
    PhysicalDamageExclusions,
    QuotationMetadata,
    WaterHeaterProject,
    WaterPumpProject,
)
from solar_quote.services.quotation_service import (
    delivery_period_text,
    generate_bank_details,
    generate_document_checklist,
    generate_quotation_number,
    generate_quotation_template,
    generate_scope_of_work,
    generate_warranty_details,
    quote_validity_days,
)

QUOTE_DATE = date(2026, 3, 10)


def _customer(**overrides):
    data = {"name": "R. Kumar", "address": "Madurai", "mobile": "9876543210", "property_type": "residential"}
    data.update(overrides)
    return Customer(**data)


def _quotation(**overrides):
    data = {"quotation_number": "Q-03-1052"}
    data.update(overrides)
    return QuotationMetadata(**data)


def test_on_grid_template():
    project = OnGridProject(
        panel_watts=530, panel_count=10, dcr_panel_count=10, project_value=300000, floor=2,
    )
    template = generate_quotation_template(project, _customer(), _quotation(), quotation_date=QUOTE_DATE)

    assert template.quotation_number == "Q-03-1052"
    assert template.quotation_date == "10/03/2026"
    assert template.quote_validity == "7 Days"
    assert template.quote_revision == 1
    assert template.prepared_by == "SM"
    assert template.contact_person == "M. Selva Prakash"
    assert template.floor == "2"
    assert template.reference == "5 kW On-Grid Solar Power Generation System"
    assert template.pricing_breakdown.customer_payment == 222000
    assert template.bom_summary.phase == "1"
    assert template.bom_summary.inverter_kw == 5.3
    assert template.bom_summary.panel_watts == 5300
    assert template.backup_solutions is None
    assert template.bill_of_materials[0].description == "Solar Panel (DCR)"
    assert template.terms_and_conditions.payment_details.advance_percentage == 90
    assert template.terms_and_conditions.payment_details.balance_percentage == 10
    assert template.terms_and_conditions.payment_details.bank_details.bank == "ICICI"
    assert template.terms_and_conditions.delivery_period == "2-3 Weeks from the date of confirmation of order"
    assert template.documents_required_for_subsidy.list[2] == "3) Aadhaar Card"
    assert template.alerts == []
    assert template.customer.contact_number == "9876543210"


def test_template_surfaces_zero_panel_alert():
    project = OnGridProject(panel_count=10, project_value=300000)
    template = generate_quotation_template(project, _customer(), _quotation(), quotation_date=QUOTE_DATE)
    assert [alert.code for alert in template.alerts] == ["BOM-NO-PANELS"]


def test_off_grid_template_carries_backup_and_summary():
    project = OffGridProject(
        panel_watts=540, panel_count=6, dcr_panel_count=6, inverter_kva="5",
        battery_ah="100", battery_count=4, voltage=12,
    )
    template = generate_quotation_template(project, _customer(), _quotation(), quotation_date=QUOTE_DATE)
    assert template.backup_solutions.backup_watts == 3880
    assert template.bom_summary.inverter_kva == "5"
    assert template.bom_summary.battery_ah == "100"
    assert template.bom_summary.dc_volt == 48
    assert template.bom_summary.panel_watts == 3240
    assert template.reference == "3 kW Off-Grid Solar Power Generation System"


def test_utility_references():
    heater = WaterHeaterProject(litre=200, project_value=40000)
    template = generate_quotation_template(heater, _customer(), _quotation(), quotation_date=QUOTE_DATE)
    assert template.reference == "200 LPD Solar Water Heater"
    assert template.bom_summary is None

    pump = WaterPumpProject(drive_hp="7.5", project_value=250000)
    template = generate_quotation_template(pump, _customer(), _quotation(), quotation_date=QUOTE_DATE)
    assert template.reference == "7.5 HP Solar Water Pump"


def test_custom_bill_of_materials_replaces_generated():
    custom = [BillOfMaterialsItem.model_validate({
        "slNo": "1", "description": "Custom Kit", "type": "-", "volt": "-", "rating": "-",
        "make": "Any", "qty": "-", "unit": "Set",
    })]
    project = OnGridProject(panel_count=10, dcr_panel_count=10, project_value=300000)
    template = generate_quotation_template(
        project, _customer(), _quotation(custom_bill_of_materials=custom), quotation_date=QUOTE_DATE
    )
    assert [item.description for item in template.bill_of_materials] == ["Custom Kit"]


def test_missing_quotation_number_is_generated():
    project = OnGridProject(panel_count=10, dcr_panel_count=10)
    template = generate_quotation_template(
        project, _customer(), _quotation(quotation_number=None), quotation_date=QUOTE_DATE
    )
    assert template.quotation_number.startswith("Q-03-")


def test_generate_quotation_number_format():
    number = generate_quotation_number(date(2026, 11, 2))
    prefix, month, sequence = number.split("-")
    assert (prefix, month) == ("Q", "11")
    assert len(sequence) == 4


def test_quote_validity_days():
    assert quote_validity_days(QUOTE_DATE, None) == 7
    assert quote_validity_days(QUOTE_DATE, date(2026, 3, 25)) == 15


def test_delivery_text():
    assert delivery_period_text("1_month") == "1 Month from the date of confirmation of order"
    assert delivery_period_text(None) == "2-3 Weeks from the date of confirmation of order"


def test_bank_details_fill_missing_fields():
    bank = generate_bank_details(_quotation(account_details=AccountDetails(bank_name="SBI")))
    assert bank.bank == "SBI"
    assert bank.ifsc_code == "ICIC0000670"


def test_document_checklist_from_requirements():
    checklist = generate_document_checklist(
        _quotation(document_requirements=DocumentRequirements(subsidy_documents=["EB Bill", "Pan Card"]))
    )
    assert checklist.list == ["1) EB Bill", "2) Pan Card"]
    assert checklist.note.startswith("*All Required Documents")


def test_default_document_checklist():
    checklist = generate_document_checklist(_quotation())
    assert len(checklist.list) == 9
    assert checklist.list[0] == "1) EB Number"


# --- Warranty ---

def test_disclaimer_comes_first():
    quotation = _quotation(physical_damage_exclusions=PhysicalDamageExclusions())
    details = generate_warranty_details(quotation, OffGridProject())
    assert details[0] == "***Physical Damages will not be Covered***"
    assert details[1] == "1. Solar (PV)Panel Modules (10-15 Years)"


def test_disabled_disclaimer_is_left_out():
    quotation = _quotation(physical_damage_exclusions=PhysicalDamageExclusions(enabled=False))
    assert generate_warranty_details(quotation, HybridProject())[0] == "1. Solar (PV)Panel Modules (30 Years)"


def test_on_grid_warranty_defaults():
    details = generate_warranty_details(_quotation(), OnGridProject())
    assert details == [
        "1. Solar (PV)Panel Modules (30 Years)",
        "   • 15 Years Manufacturing defect Warranty",
        "   • 15 Years Service Warranty",
        "   • 90% Performance Warranty till the end of 15 years",
        "   • 80% Performance Warranty till the end of 25 years",
        "2. Solar On grid Inverter (15 Years)",
        "   • Replacement Warranty for 10 Years",
        "   • Service Warranty for 5 Years",
    ]


def test_hybrid_battery_warranty_split():
    details = generate_warranty_details(_quotation(), HybridProject())
    assert details[-3:] == [
        "3. Solar Battery (5 Years)",
        "   • Replacement Warranty for 3 Years",
        "   • Service Warranty for 2 years",
    ]


def test_utility_warranty_periods():
    details = generate_warranty_details(_quotation(), WaterPumpProject(warranty={"pump": "5_years"}))
    assert details == [
        "1. Solar Water Pump (5 Years)",
        "   • Warranty for 5 Years",
        "2. Solar (PV)Panel Modules (25 Years)",
        "   • Warranty for 25 Years",
        "3. Installation (1 Year)",
        "   • Warranty for 1 Year",
    ]


# --- Scope of work ---

def test_on_grid_scope_defaults_to_customer():
    scope = generate_scope_of_work(OnGridProject(structure_type="gi_structure", floor=0))
    assert scope.structure == [
        "1) Structure:",
        "   • For flat roofing, GI Structure, South facing slant mounting (Ground Floor)",
    ]
    assert scope.customer_scope.civil_work[0] == "1) Civil work:"
    assert scope.customer_scope.net_bi_directional_meter[0] == "2) Net (Bi-directional) Meter:"
    assert scope.net_bi_directional_meter == []


def test_on_grid_company_scope():
    scope = generate_scope_of_work(
        OnGridProject(structure_type="gp_structure", civil_work_scope="company_scope", net_meter_scope="company_scope")
    )
    assert "   • Civil work including earth pit construction (Company Scope)" in scope.structure
    assert scope.net_bi_directional_meter[1].endswith("(Company Scope)")
    assert scope.customer_scope.civil_work == []
    assert scope.customer_scope.net_bi_directional_meter == []


def test_gp_structure_heights_and_floor():
    project = OnGridProject(
        structure_type="gp_structure",
        gp_structure=GPStructure(lower_end_height="3", higher_end_height="5"),
        floor="1",
    )
    assert generate_scope_of_work(project).structure[1] == (
        "   • For flat roofing, South facing slant mounting of lower end height is 3 feet & 5 feet at higher end (1st Floor)"
    )


def test_hybrid_mono_rail_hides_ground_floor():
    project = HybridProject(structure_type="mono_rail", mono_rail=MonoRail(type="mini_rail"), floor="0")
    assert generate_scope_of_work(project).structure[1] == (
        "   • For flat roofing, Mono Rail - Mini Rail, South facing slant mounting"
    )


def test_hybrid_electrical_scope():
    company = generate_scope_of_work(HybridProject(electrical_work_scope="company_scope"))
    assert company.electrical_work[0] == "3) Electrical Work:"
    assert company.customer_scope.electrical_work == []

    customer = generate_scope_of_work(HybridProject())
    assert customer.electrical_work == []
    assert customer.customer_scope.electrical_work[1] == "   • Basic electrical wiring to be provided by Customer"


def test_off_grid_training_follows_amc():
    without_amc = generate_scope_of_work(OffGridProject())
    assert "2) Training:" in without_amc.structure

    with_amc = generate_scope_of_work(OffGridProject(amc_included=True))
    assert "2) Annual Maintenance:" in with_amc.structure
    assert "3) Training:" in with_amc.structure


def test_water_pump_plumbing_scope():
    scope = generate_scope_of_work(WaterPumpProject(plumbing_work_scope="company_scope"))
    assert scope.plumbing_work[0] == "2) Plumbing Work:"
    assert scope.customer_scope.civil_work[0] == "1) Civil work:"


def test_water_heater_scope():
    scope = generate_scope_of_work(WaterHeaterProject())
    assert scope.structure[1] == "   • Piping work up to 15 feet included"
    assert scope.customer_scope.civil_work[0] == "1) Additional Work:"
