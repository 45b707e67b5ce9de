"""CSV export of pain records."""

import pandas as pd

from ..models.pain import PainRecord

CSV_COLUMNS = [
    "Date",
    "Pain Level",
    "Duration",
    "Location",
    "Menstrual Status",
    "Symptoms",
    "Remedies",
    "Effectiveness",
    "Notes",
]


def records_to_dataframe(records: list[PainRecord]) -> pd.DataFrame:
    """One row per record in the export column layout, oldest first."""
    rows = []
    for record in sorted(records, key=lambda r: r.recorded_at):
        rows.append({
            "Date": record.entry_date.isoformat(),
            "Pain Level": record.pain_level,
            "Duration": f"{record.duration_minutes} min" if record.duration_minutes is not None else "",
            "Location": "; ".join(loc.value.replace("_", " ") for loc in record.locations),
            "Menstrual Status": record.menstrual_status.display,
            "Symptoms": "; ".join(s.value.replace("_", " ") for s in record.symptoms),
            "Remedies": "; ".join(
                " ".join(filter(None, [m.name, m.dosage, m.timing])) for m in record.medications
            ),
            "Effectiveness": "" if record.effectiveness is None else record.effectiveness,
            "Notes": record.notes or "",
        })
    return pd.DataFrame(rows, columns=CSV_COLUMNS)


def export_csv(records: list[PainRecord]) -> str:
    """Render pain records as CSV text."""
    return records_to_dataframe(records).to_csv(index=False)
