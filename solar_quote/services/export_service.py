"""Bill of materials as a flat table for the spreadsheet export."""

import pandas as pd

BOM_COLUMNS = ["Sl.No", "Description", "Type", "Volt", "Rating", "Make", "Qty", "Unit", "Rate", "Amount"]


def bom_to_dataframe(bill_of_materials) -> pd.DataFrame:
    rows = []
    for item in bill_of_materials:
        wire = item.model_dump(by_alias=True)
        rows.append([
            wire["slNo"],
            wire["description"],
            wire["type"],
            wire["volt"],
            wire["rating"],
            wire["make"],
            wire["qty"],
            wire["unit"],
            wire["rate"],
            wire["amount"],
        ])
    df = pd.DataFrame(rows, columns=BOM_COLUMNS, dtype=object)

    # Solar rows carry no prices; drop the columns rather than export empty ones
    if df["Rate"].isna().all() and df["Amount"].isna().all():
        df = df.drop(columns=["Rate", "Amount"])
    return df


def bom_to_csv(bill_of_materials) -> str:
    return bom_to_dataframe(bill_of_materials).to_csv(index=False)
