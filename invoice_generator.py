from reportlab.lib.pagesizes import A4
from reportlab.pdfgen import canvas
from io import BytesIO
from datetime import date, timedelta
import logging
import uuid
import pandas as pd
from PIL import Image, ImageDraw, ImageFont

from config import ApplicationConfig
from invoice_number import generate_invoice_number
from models import LineItem, to_percent
from number_words import format_indian
from tax_calc import as_line_item, calculate, is_same_state, money

logger = logging.getLogger(__name__)

HEADER_FIELDS = ("invoice_number", "issue_date", "due_date", "payment_terms", "notes", "terms")
CLIENT_FIELDS = ("name", "email", "phone", "address", "gstin", "state")

# row key -> exported column heading
EXPORT_COLUMNS = {
    "sr": "Sr",
    "hsn": "HSN/SAC",
    "description": "Description",
    "qty": "Qty",
    "rate": "Rate",
    "discount_percent": "Discount %",
    "taxable": "Taxable Value",
    "gst_rate": "GST %",
    "cgst": "CGST",
    "sgst": "SGST",
    "igst": "IGST",
    "line_total": "Total",
}


def new_invoice_draft(existing_numbers, today=None, prefix=None):
    """Fresh draft with the next number, today's date and one empty row."""
    today = today or date.today()
    return {
        "invoice_number": generate_invoice_number(existing_numbers, prefix, today),
        "issue_date": today.isoformat(),
        "due_date": (today + timedelta(days=ApplicationConfig.PAYMENT_DUE_DAYS)).isoformat(),
        "payment_terms": ApplicationConfig.DEFAULT_PAYMENT_TERMS,
        "company": dict(ApplicationConfig.COMPANY_INFO),
        "client": {k: "" for k in CLIENT_FIELDS},
        "items": [LineItem(id=str(uuid.uuid4()), quantity=1, amount=0)],
        "discount": 0,
        "notes": "",
        "terms": ApplicationConfig.DEFAULT_TERMS,
        "status": "draft",
    }


def build_invoice(header, items=None, discount=None):
    """
    Compute rows and totals for an invoice and return the dict the exporters
    render. Jurisdiction comes from the company and client states.
    """
    items = [as_line_item(it) for it in (header.get("items", []) if items is None else items)]
    discount = header.get("discount", 0) if discount is None else discount
    company = {**ApplicationConfig.COMPANY_INFO, **header.get("company", {})}
    client = {k: "" for k in CLIENT_FIELDS}
    client.update(header.get("client", {}))

    same_state = is_same_state(company.get("state"), client.get("state"))
    result = calculate(items, discount, same_state)

    rows = []
    for sr, (it, line) in enumerate(zip(items, result.lines), start=1):
        rows.append({
            "sr": sr,
            "hsn": it.hsn_code,
            "description": it.description,
            "qty": it.quantity,
            "rate": it.rate,
            "discount_percent": it.discount_percent,
            "taxable": line.taxable,
            "gst_rate": it.gst_rate,
            "gst": line.gst,
            "cgst": line.cgst,
            "sgst": line.sgst,
            "igst": line.igst,
            "line_total": line.line_total,
        })

    invoice = {k: header.get(k, "") for k in HEADER_FIELDS}
    invoice.update({
        "company": company,
        "client": client,
        "same_state": same_state,
        "discount": to_percent(discount),
        "items": rows,
        "line_items": [it.to_dict() for it in items],
        "totals": {**result.to_dict(), "discountAmount": result.discount_amount},
        "status": header.get("status", "draft"),
    })
    logger.info("Built invoice %s: %d items, rounded total %s",
                invoice["invoice_number"], len(rows), result.rounded_total)
    return invoice


def _rs(value):
    return f"Rs. {format_indian(money(value))}"


def _summary_lines(invoice):
    totals = invoice["totals"]
    lines = [("Subtotal", _rs(totals["subtotal"]))]
    if invoice["discount"] > 0:
        lines.append((f"Discount ({invoice['discount']:g}%)", "-" + _rs(totals["discountAmount"])))
    for label, key in (("CGST", "totalCGST"), ("SGST", "totalSGST"), ("IGST", "totalIGST")):
        if totals[key] > 0:
            lines.append((label, _rs(totals[key])))
    lines.append(("Total GST", _rs(totals["totalGST"])))
    lines.append(("Total", _rs(totals["total"])))
    lines.append(("Rounded Total", _rs(totals["roundedTotal"])))
    return lines


def generate_invoice_pdf(invoice_dict):
    buffer = BytesIO()
    c = canvas.Canvas(buffer, pagesize=A4)
    width, height = A4

    # Set initial coordinates
    x, y = 40, height - 40

    def next_line(y, step, font=("Helvetica", 9)):
        y -= step
        if y < 80:
            c.showPage()
            c.setFont(*font)
            y = height - 40
        return y

    company = invoice_dict["company"]
    client = invoice_dict["client"]

    # Header Section
    c.setFont("Helvetica-Bold", 14)
    c.drawCentredString(width/2, y, "TAX INVOICE")
    y -= 20
    c.setFont("Helvetica-Bold", 11)
    c.drawCentredString(width/2, y, company.get("name", ""))
    y -= 25

    # Invoice Details
    c.setFont("Helvetica", 10)
    c.drawString(x, y, f"Invoice: {invoice_dict['invoice_number']}")
    c.drawString(width/2, y, f"Date: {invoice_dict['issue_date']}")
    y -= 15
    c.drawString(x, y, f"Payment Terms: {invoice_dict.get('payment_terms', '')}")
    c.drawString(width/2, y, f"Due Date: {invoice_dict.get('due_date', '')}")
    y -= 25

    # From / Bill To
    c.setFont("Helvetica-Bold", 10)
    c.drawString(x, y, "From")
    c.drawString(width/2, y, "Bill To")
    y -= 15
    c.setFont("Helvetica", 9)
    left = [company.get("name", ""), company.get("address", ""),
            f"GSTIN: {company.get('gstin', '')}", f"State: {company.get('state', '')}"]
    right = [client.get("name", ""), client.get("address", ""), client.get("email", ""),
             client.get("phone", ""), f"GSTIN: {client.get('gstin', '') or '-'}",
             f"State: {client.get('state', '')}"]
    for i in range(max(len(left), len(right))):
        if i < len(left):
            c.drawString(x, y, str(left[i]))
        if i < len(right):
            c.drawString(width/2, y, str(right[i]))
        y -= 12
    y -= 15

    # Table Header
    c.setFont("Helvetica-Bold", 9)
    headers = ["Sr", "HSN/SAC", "Description", "Qty", "Rate", "Disc", "Taxable", "GST%", "GST", "Total"]
    positions = [x, x+20, x+70, x+220, x+250, x+305, x+335, x+395, x+425, x+475]
    for header, pos in zip(headers, positions):
        c.drawString(pos, y, header)
    y -= 15

    # Table Items
    c.setFont("Helvetica", 8)
    for item in invoice_dict["items"]:
        values = [
            str(item["sr"]),
            str(item.get("hsn") or "-"),
            str(item["description"])[:30],
            f"{item['qty']:g}",
            f"{item['rate']:.2f}",
            f"{item['discount_percent']:g}%" if item["discount_percent"] else "-",
            f"{item['taxable']:.2f}",
            f"{item['gst_rate']:g}%",
            f"{item['gst']:.2f}",
            f"{item['line_total']:.2f}",
        ]
        for value, pos in zip(values, positions):
            c.drawString(pos, y, value)
        # Page break if needed
        y = next_line(y, 13, ("Helvetica", 8))

    # Summary
    y = next_line(y, 10)
    c.setFont("Helvetica", 9)
    for label, value in _summary_lines(invoice_dict):
        c.drawString(x+305, y, f"{label}:")
        c.drawRightString(width - 40, y, value)
        y = next_line(y, 13)

    y = next_line(y, 10)
    c.setFont("Helvetica-Oblique", 9)
    c.drawString(x, y, f"Amount in words: {invoice_dict['totals']['amountInWords']}")
    y = next_line(y, 20)

    c.setFont("Helvetica", 9)
    for title, key in (("Notes", "notes"), ("Terms & Conditions", "terms")):
        if invoice_dict.get(key):
            c.drawString(x, y, f"{title}:")
            y = next_line(y, 12)
            for text_line in str(invoice_dict[key]).splitlines():
                c.drawString(x + 10, y, text_line)
                y = next_line(y, 12)
            y = next_line(y, 6)

    # Signatory
    y = next_line(y, 20)
    c.drawRightString(width - 40, y, f"For {company.get('name', '')}")
    y = next_line(y, 35)
    c.drawRightString(width - 40, y, company.get("signatory", ""))

    c.showPage()
    c.save()
    buffer.seek(0)
    return buffer.read()


def generate_invoice_image_bytes(invoice_dict, width=1000, row_height=30):
    summary = _summary_lines(invoice_dict)
    rows = max(len(invoice_dict['items']), 1) + len(summary) + 8
    height = rows * row_height + 200
    img = Image.new("RGB", (width, height), "white")
    draw = ImageDraw.Draw(img)

    try:
        font = ImageFont.truetype("arial.ttf", 14)
        font_bold = ImageFont.truetype("arialbd.ttf", 14)
    except OSError:
        font = ImageFont.load_default()
        font_bold = ImageFont.load_default()

    y = 30

    # Header
    draw.text((width/2 - 100, y), "TAX INVOICE", font=font_bold, fill="black")
    y += 40

    # Invoice Details
    draw.text((50, y), f"Invoice: {invoice_dict['invoice_number']}", font=font, fill="black")
    draw.text((width/2, y), f"Date: {invoice_dict['issue_date']}", font=font, fill="black")
    y += 30

    # Company & Client
    company = invoice_dict["company"]
    client = invoice_dict["client"]
    draw.text((50, y), f"From: {company.get('name', '')}", font=font, fill="black")
    draw.text((width/2, y), f"GSTIN: {company.get('gstin', '')}", font=font, fill="black")
    y += 25

    draw.text((50, y), f"Bill To: {client.get('name', '')}", font=font, fill="black")
    draw.text((width/2, y), f"State: {client.get('state', '')}", font=font, fill="black")
    y += 40

    # Table Header
    header_text = "Sr   Description               HSN        Qty    Rate       Taxable     GST%   Total"
    draw.text((50, y), header_text, font=font_bold, fill="black")
    y += row_height

    # Table Items
    for item in invoice_dict['items']:
        item_text = (f"{item['sr']:<4} {item['description'][:20]:<20}   "
                     f"{item.get('hsn', ''):<8}   {item['qty']:<5g}  "
                     f"{item['rate']:<9.2f}  {item['taxable']:<10.2f}  "
                     f"{item['gst_rate']:<5g}  {item['line_total']:.2f}")
        draw.text((50, y), item_text, font=font, fill="black")
        y += row_height

    # Totals
    y += 20
    for label, value in summary:
        draw.text((width/2, y), f"{label}: {value}", font=font_bold, fill="black")
        y += row_height
    draw.text((50, y), invoice_dict['totals']['amountInWords'], font=font, fill="black")

    buffer = BytesIO()
    img.save(buffer, format="PNG")
    buffer.seek(0)
    return buffer.getvalue()


def _items_frame(invoice_dict):
    """Item rows with the invoice number and the column headings of the printed invoice."""
    df = pd.DataFrame(invoice_dict['items'], columns=list(EXPORT_COLUMNS))
    df = df.rename(columns=EXPORT_COLUMNS)
    df.insert(0, "Invoice No.", invoice_dict['invoice_number'])
    return df


def _totals_frame(invoice_dict):
    totals = invoice_dict['totals']
    record = {
        "Invoice No.": invoice_dict['invoice_number'],
        "Client": invoice_dict['client'].get('name', ''),
        "Tax Type": "CGST + SGST" if invoice_dict['same_state'] else "IGST",
        "Discount %": invoice_dict['discount'],
        **totals,
    }
    return pd.DataFrame([record])


def generate_invoice_xlsx_bytes(invoice_dict):
    buffer = BytesIO()

    with pd.ExcelWriter(buffer, engine="openpyxl") as writer:
        _items_frame(invoice_dict).to_excel(writer, index=False, sheet_name="Items")
        _totals_frame(invoice_dict).to_excel(writer, index=False, sheet_name="Totals")

    buffer.seek(0)
    return buffer.getvalue()


def generate_invoice_csv_bytes(invoice_dict):
    """Item rows only; totals are in the Totals sheet of the XLSX export."""
    buffer = BytesIO()
    buffer.write(_items_frame(invoice_dict).to_csv(index=False).encode('utf-8'))
    buffer.seek(0)
    return buffer.getvalue()
