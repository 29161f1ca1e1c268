from solar_quote.models import OnGridProject, WaterHeaterProject
from solar_quote.services.bom_service import generate_bill_of_materials
from solar_quote.services.export_service import bom_to_csv, bom_to_dataframe


def test_solar_bom_frame_has_no_price_columns():
    bom = generate_bill_of_materials(OnGridProject(panel_count=10, dcr_panel_count=5, non_dcr_panel_count=5))
    df = bom_to_dataframe(bom)
    assert list(df.columns) == ["Sl.No", "Description", "Type", "Volt", "Rating", "Make", "Qty", "Unit"]
    assert df["Sl.No"].tolist()[:3] == ["1a", "1b", 2]
    assert df["Qty"].iloc[-1] == "-"


def test_utility_bom_frame_keeps_prices():
    bom = generate_bill_of_materials(WaterHeaterProject(qty=2, project_value=40000))
    df = bom_to_dataframe(bom)
    assert df["Rate"].iloc[0] == 40000
    assert df["Amount"].iloc[0] == 80000


def test_csv_has_header_row():
    csv_text = bom_to_csv(generate_bill_of_materials(OnGridProject(panel_count=4, dcr_panel_count=4)))
    assert csv_text.splitlines()[0] == "Sl.No,Description,Type,Volt,Rating,Make,Qty,Unit"
