# utils/export_utils.py
import io

import pandas as pd
from xlsxwriter.utility import xl_col_to_name


# -----------------------------
# Export table to Excel
# -----------------------------
def export_dataframe_excel(df: pd.DataFrame, sheet_name: str = "Datos") -> bytes:
    """
    Returns Excel bytes from the provided DataFrame.
    Header row in bold, columns sized to their longest value, header frozen.
    """
    output = io.BytesIO()
    with pd.ExcelWriter(output, engine="xlsxwriter") as writer:
        df.to_excel(writer, index=False, sheet_name=sheet_name)
        workbook = writer.book
        worksheet = writer.sheets[sheet_name]

        header_fmt = workbook.add_format({"bold": True, "bg_color": "#E8F0FE", "border": 1})
        for idx, col in enumerate(df.columns):
            worksheet.write(0, idx, col, header_fmt)
            longest = max([len(str(col))] + [len(str(v)) for v in df[col].tolist()])
            letter = xl_col_to_name(idx)
            worksheet.set_column(f"{letter}:{letter}", min(longest + 2, 60))
        worksheet.freeze_panes(1, 0)

    return output.getvalue()


# -----------------------------
# Export table to CSV
# -----------------------------
def export_dataframe_csv(df: pd.DataFrame) -> bytes:
    # BOM so Excel opens accents correctly
    return df.to_csv(index=False).encode("utf-8-sig")


# -----------------------------
# Export table to PDF
# -----------------------------
def export_dataframe_pdf(df: pd.DataFrame, title_text: str | None = None, orientation: str = "portrait") -> bytes:
    """
    Returns PDF bytes from the provided DataFrame: optional title, then one
    table with a repeated header row.
    """
    from reportlab.lib import colors
    from reportlab.lib.enums import TA_LEFT
    from reportlab.lib.pagesizes import A4, landscape
    from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
    from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

    def fmt(v):
        if v is None:
            return "-"
        if isinstance(v, float) and pd.isna(v):
            return "-"
        return str(v)

    pagesize = A4 if orientation == "portrait" else landscape(A4)
    buf = io.BytesIO()
    doc = SimpleDocTemplate(buf, pagesize=pagesize, leftMargin=18, rightMargin=18, topMargin=18, bottomMargin=18)

    elements = []
    styles = getSampleStyleSheet()
    if title_text:
        title_style = ParagraphStyle("TitleLeft", parent=styles["Title"], alignment=TA_LEFT)
        elements.append(Paragraph(title_text, title_style))
        elements.append(Spacer(1, 12))

    if df.empty:
        elements.append(Paragraph("No hay registros para exportar.", styles["Normal"]))
    else:
        cell_style = styles["BodyText"]
        data = [list(df.columns)]
        for _, row in df.iterrows():
            data.append([Paragraph(fmt(row[c]), cell_style) for c in df.columns])
        table = Table(data, repeatRows=1)
        table.setStyle(TableStyle([
            ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor("#f0f0f0")),
            ("TEXTCOLOR", (0, 0), (-1, 0), colors.HexColor("#333333")),
            ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
            ("FONTSIZE", (0, 0), (-1, 0), 10),
            ("ALIGN", (0, 0), (-1, -1), "LEFT"),
            ("GRID", (0, 0), (-1, -1), 0.25, colors.HexColor("#cccccc")),
            ("ROWBACKGROUNDS", (0, 1), (-1, -1), [colors.white, colors.HexColor("#fbfbfb")]),
            ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
        ]))
        elements.append(table)

    doc.build(elements)
    return buf.getvalue()
