from datetime import date
from enum import Enum
from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import (
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    field_validator,
    model_serializer,
    model_validator,
)
from pydantic.alias_generators import to_camel

from solar_quote.constants import (
    DEFAULT_ADVANCE_PERCENTAGE,
    DEFAULT_BATTERY_AH,
    DEFAULT_BATTERY_VOLTAGE,
    DEFAULT_GST_PERCENTAGE,
    DEFAULT_PANEL_WATTS,
    DEFAULT_PUMP_PANEL_COUNT,
    DEFAULT_PUMP_PANEL_WATTS,
    DEFAULT_WATER_HEATER_LITRES,
)
from solar_quote.utils import format_number, parse_money


class QuoteModel(BaseModel):
    """snake_case in Python, camelCase on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class FrozenQuoteModel(QuoteModel):
    model_config = ConfigDict(frozen=True)


def _money_or_none(value):
    if value is None or value == "":
        return None
    return parse_money(value)


OptionalMoney = Annotated[Optional[float], BeforeValidator(_money_or_none)]

ScopeOption = Literal["customer_scope", "company_scope"]
InverterPhase = Literal["single_phase", "three_phase"]
EarthOption = Literal["dc", "ac", "ac_dc"]


class ProjectType(str, Enum):
    ON_GRID = "on_grid"
    OFF_GRID = "off_grid"
    HYBRID = "hybrid"
    WATER_HEATER = "water_heater"
    WATER_PUMP = "water_pump"


SOLAR_PROJECT_TYPES = {ProjectType.ON_GRID, ProjectType.OFF_GRID, ProjectType.HYBRID}
BATTERY_PROJECT_TYPES = {ProjectType.OFF_GRID, ProjectType.HYBRID}


# --- Project configuration (input) ---

class GPStructure(QuoteModel):
    lower_end_height: Optional[str] = None
    higher_end_height: Optional[str] = None


class MonoRail(QuoteModel):
    type: Optional[Literal["mini_rail", "long_rail"]] = None


class BackupUsage(QuoteModel):
    usage_watts: List[float] = Field(default_factory=list)


class ProjectBase(QuoteModel):
    project_value: OptionalMoney = None
    gst_percentage: float = DEFAULT_GST_PERCENTAGE
    floor: Optional[str] = None
    civil_work_scope: Optional[ScopeOption] = None

    @model_validator(mode="before")
    @classmethod
    def none_as_default(cls, data):
        # Forms send null for untouched inputs; a missing key falls back to the field default
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data

    @field_validator("gst_percentage", mode="before")
    @classmethod
    def zero_gst_means_default(cls, value):
        return value or DEFAULT_GST_PERCENTAGE

    @field_validator("floor", mode="before")
    @classmethod
    def floor_as_text(cls, value):
        if value is None:
            return None
        return str(value)


class EarthingMixin(QuoteModel):
    earth: List[EarthOption] = Field(default_factory=list)
    lightning_arrest: bool = False
    electrical_accessories: bool = False
    electrical_count: Optional[float] = None

    @field_validator("earth", mode="before")
    @classmethod
    def wrap_legacy_earth(cls, value):
        # Older records stored a single earthing option as a plain string
        if value is None or value == "":
            return []
        if isinstance(value, str):
            return [value]
        return value

    @property
    def earth_selected(self) -> bool:
        return len(self.earth) > 0

    @property
    def earth_covers_ac_and_dc(self) -> bool:
        return "ac_dc" in self.earth or ("ac" in self.earth and "dc" in self.earth)


class SolarProjectBase(ProjectBase, EarthingMixin):
    panel_watts: Union[int, str] = DEFAULT_PANEL_WATTS
    panel_count: int = 1
    panel_type: Optional[Literal["bifacial", "topcon", "mono_perc"]] = None
    solar_panel_make: List[str] = Field(default_factory=list)
    dcr_panel_count: int = 0
    non_dcr_panel_count: int = 0
    inverter_make: List[str] = Field(default_factory=list)
    inverter_kw: Optional[float] = Field(default=None, alias="inverterKW")
    inverter_qty: Optional[int] = None
    inverter_phase: InverterPhase = "single_phase"
    structure_type: Optional[str] = None
    gp_structure: Optional[GPStructure] = None
    mono_rail: Optional[MonoRail] = None
    price_per_kw: OptionalMoney = Field(default=None, alias="pricePerKW")


class BatteryFields(QuoteModel):
    inverter_kva: Optional[str] = Field(default=None, alias="inverterKVA")
    inverter_volt: Optional[str] = None
    battery_brand: Optional[str] = None
    battery_type: Optional[Literal["lead_acid", "lithium"]] = None
    battery_ah: str = Field(default=DEFAULT_BATTERY_AH, alias="batteryAH")
    voltage: float = DEFAULT_BATTERY_VOLTAGE
    battery_count: int = 1
    backup_solutions: Optional[BackupUsage] = None

    @field_validator("inverter_kva", "inverter_volt", "battery_ah", mode="before")
    @classmethod
    def numeric_text(cls, value):
        if value is None:
            return None
        return format_number(value)


class OnGridProject(SolarProjectBase):
    project_type: Literal["on_grid"] = "on_grid"
    net_meter_scope: Optional[ScopeOption] = None


class OffGridProject(SolarProjectBase, BatteryFields):
    project_type: Literal["off_grid"] = "off_grid"
    amc_included: bool = False


class HybridProject(SolarProjectBase, BatteryFields):
    project_type: Literal["hybrid"] = "hybrid"
    net_meter_scope: Optional[ScopeOption] = None
    electrical_work_scope: Optional[ScopeOption] = None


class UtilityProjectBase(ProjectBase):
    """Water heater / water pump: project_value is the price of ONE unit, GST included."""

    qty: int = 1
    # Amounts stored upstream; only used as price fallbacks for the BOM row
    customer_payment: OptionalMoney = None
    base_price: OptionalMoney = None
    gst_amount: OptionalMoney = None
    labour_and_transport: bool = False
    plumbing_work_scope: Optional[ScopeOption] = None
    warranty: Dict[str, str] = Field(default_factory=dict)

    @field_validator("qty", mode="before")
    @classmethod
    def zero_qty_means_one(cls, value):
        return value or 1


class WaterHeaterProject(UtilityProjectBase):
    project_type: Literal["water_heater"] = "water_heater"
    brand: Optional[str] = None
    litre: int = DEFAULT_WATER_HEATER_LITRES
    heating_coil: Optional[str] = None
    water_heater_model: Literal["pressurized", "non_pressurized"] = "non_pressurized"


class WaterPumpProject(UtilityProjectBase, EarthingMixin):
    project_type: Literal["water_pump"] = "water_pump"
    drive_hp: Optional[str] = Field(default=None, alias="driveHP")
    hp: Optional[str] = None  # legacy name of drive_hp
    panel_watts: Union[int, str] = DEFAULT_PUMP_PANEL_WATTS
    panel_count: int = DEFAULT_PUMP_PANEL_COUNT
    panel_brand: List[str] = Field(default_factory=list)
    inverter_phase: Optional[InverterPhase] = None
    structure_type: Optional[str] = None
    gp_structure: Optional[GPStructure] = None
    dc_cable: bool = False

    @field_validator("drive_hp", "hp", mode="before")
    @classmethod
    def hp_as_text(cls, value):
        if value is None:
            return None
        return format_number(value)


ProjectConfiguration = Annotated[
    Union[OnGridProject, OffGridProject, HybridProject, WaterHeaterProject, WaterPumpProject],
    Field(discriminator="project_type"),
]


# --- Customer / quotation metadata (input) ---

class Customer(QuoteModel):
    name: str
    address: str = ""
    mobile: str = ""
    property_type: str = ""
    eb_service_number: Optional[str] = None
    tariff_code: Optional[str] = None
    eb_sanction_phase: Optional[str] = None
    eb_sanction_kw: Optional[Union[float, str]] = Field(default=None, alias="ebSanctionKW")


class SolarPanelWarrantyTerms(QuoteModel):
    manufacturing_defect: str = "15 Years Manufacturing defect Warranty"
    service_warranty: str = "15 Years Service Warranty"
    performance_warranty: List[str] = Field(default_factory=lambda: [
        "90% Performance Warranty till the end of 15 years",
        "80% Performance Warranty till the end of 25 years",
    ])


class InverterWarrantyTerms(QuoteModel):
    replacement_warranty: str = "Replacement Warranty for 10 Years"
    service_warranty: str = "Service Warranty for 5 Years"


class DetailedWarrantyTerms(QuoteModel):
    solar_panels: Optional[SolarPanelWarrantyTerms] = Field(default_factory=SolarPanelWarrantyTerms)
    inverter: Optional[InverterWarrantyTerms] = Field(default_factory=InverterWarrantyTerms)


class PhysicalDamageExclusions(QuoteModel):
    enabled: bool = True
    disclaimer_text: str = "***Physical Damages will not be Covered***"


class AccountDetails(QuoteModel):
    account_holder_name: Optional[str] = None
    bank_name: Optional[str] = None
    branch: Optional[str] = None
    account_number: Optional[str] = None
    ifsc_code: Optional[str] = None


class DocumentRequirements(QuoteModel):
    subsidy_documents: List[str] = Field(default_factory=lambda: [
        "Aadhar Card",
        "EB Bill (Last 3 Months)",
        "House Tax Receipt",
        "Land Patta",
        "Building Plan Approval",
        "Fire NOC (for Commercial)",
        "Pollution NOC (for Commercial)",
        "Bank Passbook",
        "Cancelled Cheque",
    ])
    note: Optional[str] = None


# --- Bill of materials ---

class SerialNumber(BaseModel):
    """BOM row ordinal; a split row carries a letter suffix (1a, 1b)."""

    model_config = ConfigDict(frozen=True)

    major: int
    minor: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def from_wire(cls, value):
        if isinstance(value, bool):
            raise ValueError("slNo cannot be a boolean")
        if isinstance(value, (int, float)):
            return {"major": int(value)}
        if isinstance(value, str):
            text = value.strip().lower()
            digits = text.rstrip("abcdefghijklmnopqrstuvwxyz")
            if not digits.isdigit():
                raise ValueError(f"invalid slNo {value!r}")
            return {"major": int(digits), "minor": text[len(digits):] or None}
        return value

    @model_serializer
    def to_wire(self) -> Union[int, str]:
        if self.minor:
            return f"{self.major}{self.minor}"
        return self.major

    def __str__(self):
        return f"{self.major}{self.minor or ''}"


UNDECIDED_QTY = "-"


class Quantity(BaseModel):
    """Either a fixed amount or left to the preparer (rendered as "-")."""

    model_config = ConfigDict(frozen=True)

    value: Optional[float] = None

    @classmethod
    def fixed(cls, value) -> "Quantity":
        return cls(value=value)

    @classmethod
    def undecided(cls) -> "Quantity":
        return cls(value=None)

    @property
    def is_undecided(self) -> bool:
        return self.value is None

    @model_validator(mode="before")
    @classmethod
    def from_wire(cls, value):
        if value is None or value == UNDECIDED_QTY:
            return {"value": None}
        if isinstance(value, (int, float, str)):
            return {"value": float(value)}
        return value

    @model_serializer
    def to_wire(self) -> Union[int, float, str]:
        if self.value is None:
            return UNDECIDED_QTY
        if float(self.value).is_integer():
            return int(self.value)
        return self.value


class BillOfMaterialsItem(FrozenQuoteModel):
    sl_no: SerialNumber
    description: str
    type: str
    volt: str
    rating: str
    make: str
    qty: Quantity
    unit: str
    rate: Optional[float] = None
    amount: Optional[float] = None


class Alert(FrozenQuoteModel):
    code: str
    message: str


# --- Computed results ---

class PricingBreakdown(FrozenQuoteModel):
    description: str
    # For water heater / water pump this repeats `quantity` (renderers read it as the unit count)
    kw: float
    quantity: int = 1
    rate_per_kw: int
    gst_per_kw: int
    gst_percentage: float
    base_price: int
    gst_amount: int
    value_with_gst: float = Field(alias="valueWithGST")
    total_cost: int
    subsidy_amount: int
    customer_payment: int
    roundoff: float = 0.0


class BackupSolutions(FrozenQuoteModel):
    backup_watts: int
    usage_watts: List[float]
    backup_hours: List[float]


class BomSummary(FrozenQuoteModel):
    phase: str
    inverter_kw: Optional[float] = Field(default=None, alias="inverterKW")
    inverter_kva: Optional[str] = Field(default=None, alias="inverterKVA")
    panel_watts: int
    battery_ah: Optional[str] = Field(default=None, alias="batteryAH")
    dc_volt: Optional[float] = None


class CompanyContact(FrozenQuoteModel):
    phone: List[str]
    email: str
    website: str
    address: str


class CompanyDetails(FrozenQuoteModel):
    name: str
    logo: str
    contact: CompanyContact


class CustomerDetails(FrozenQuoteModel):
    name: str
    address: str
    contact_number: str
    eb_service_number: Optional[str] = None
    tariff_code: Optional[str] = None
    eb_sanction_phase: Optional[str] = None
    eb_sanction_kw: Optional[Union[float, str]] = Field(default=None, alias="ebSanctionKW")


class BankDetails(FrozenQuoteModel):
    name: str
    bank: str
    branch: str
    account_no: str
    ifsc_code: str


class PaymentDetails(FrozenQuoteModel):
    advance_percentage: float
    balance_percentage: float
    bank_details: BankDetails


class TermsAndConditions(FrozenQuoteModel):
    warranty_details: List[str]
    payment_details: PaymentDetails
    delivery_period: str


class CustomerScope(FrozenQuoteModel):
    civil_work: List[str] = Field(default_factory=list)
    net_bi_directional_meter: List[str] = Field(default_factory=list)
    electrical_work: List[str] = Field(default_factory=list)
    plumbing_work: List[str] = Field(default_factory=list)


class ScopeOfWork(FrozenQuoteModel):
    # Company side
    structure: List[str] = Field(default_factory=list)
    net_bi_directional_meter: List[str] = Field(default_factory=list)
    electrical_work: List[str] = Field(default_factory=list)
    plumbing_work: List[str] = Field(default_factory=list)
    customer_scope: CustomerScope = Field(default_factory=CustomerScope)


class DocumentChecklist(FrozenQuoteModel):
    list: List[str]
    note: str


class QuotationMetadata(QuoteModel):
    quotation_number: Optional[str] = None
    document_version: int = 1
    valid_until: Optional[date] = None
    prepared_by: Optional[str] = None
    contact_person: Optional[str] = None
    contact_number: Optional[str] = None
    ref_name: Optional[str] = None
    advance_payment_percentage: Optional[float] = DEFAULT_ADVANCE_PERCENTAGE
    delivery_timeframe: Optional[str] = None
    detailed_warranty_terms: Optional[DetailedWarrantyTerms] = None
    physical_damage_exclusions: Optional[PhysicalDamageExclusions] = None
    account_details: Optional[AccountDetails] = None
    document_requirements: Optional[DocumentRequirements] = None
    custom_bill_of_materials: Optional[List[BillOfMaterialsItem]] = None


class QuotationTemplate(FrozenQuoteModel):
    header: CompanyDetails
    quotation_number: str
    quotation_date: str
    quote_revision: int
    quote_validity: str
    prepared_by: str
    ref_name: Optional[str] = None
    contact_person: str
    contact_number: str
    project_type: str
    floor: Optional[str] = None
    customer: CustomerDetails
    reference: str
    pricing_breakdown: Optional[PricingBreakdown] = None
    bom_summary: Optional[BomSummary] = None
    backup_solutions: Optional[BackupSolutions] = None
    bill_of_materials: List[BillOfMaterialsItem]
    terms_and_conditions: TermsAndConditions
    scope_of_work: ScopeOfWork
    documents_required_for_subsidy: DocumentChecklist
    alerts: List[Alert] = Field(default_factory=list)


# --- API payloads ---

class BomPreviewRequest(QuoteModel):
    project: Dict[str, Any]


class BomPreviewResponse(QuoteModel):
    bill_of_materials: List[BillOfMaterialsItem]
    alerts: List[Alert] = Field(default_factory=list)


class QuotationRequest(QuoteModel):
    project: Dict[str, Any]
    customer: Customer
    quotation: QuotationMetadata
    quotation_date: Optional[date] = None
