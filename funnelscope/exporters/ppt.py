from io import BytesIO
from typing import List, Optional, Sequence

from pptx import Presentation
from pptx.util import Inches, Pt

from funnelscope.models.io import MetricsReport, ProjectionReport, Prospect, ScalingTimeline
from funnelscope.utils.formatters import format_currency, format_number, format_percentage, format_roi


def _add_table(slide, rows: Sequence[Sequence[str]], top: float = 1.5) -> None:
    n_rows, n_cols = len(rows), len(rows[0])
    shape = slide.shapes.add_table(n_rows, n_cols, Inches(0.5), Inches(top), Inches(9), Inches(0.4 * n_rows))
    table = shape.table
    for i, row in enumerate(rows):
        for j, value in enumerate(row):
            cell = table.cell(i, j)
            cell.text = value
            cell.text_frame.paragraphs[0].font.size = Pt(12)


def _titled_slide(prs, title: str):
    slide = prs.slides.add_slide(prs.slide_layouts[5])   # title only
    slide.shapes.title.text = title
    return slide


def funnel_rows(m: MetricsReport) -> List[List[str]]:
    rows = [["Stage", "Volume", "CPA", "Rate", "Price"]]
    for name, vol, cpa, rate, price in zip(m.stage_names, m.volumes, m.cpas, m.rates, m.prices):
        rows.append([
            name,
            format_number(vol, 1),
            format_currency(cpa),
            format_percentage(rate) if rate is not None else "—",
            format_currency(price) if price else "—",
        ])
    rows.append(["Sales", format_number(m.sales, 1), format_currency(m.cpa_customer), "", ""])
    return rows


def comparison_rows(current: Optional[MetricsReport], projected: ProjectionReport) -> List[List[str]]:
    def cur(attr, fmt):
        return fmt(getattr(current, attr)) if current else "—"
    return [
        ["Metric", "Current", "Projected"],
        ["Monthly Spend", cur("monthly_spend", lambda v: format_currency(v, compact=True)),
         format_currency(projected.monthly_spend, compact=True)],
        ["Monthly Sales", cur("sales", lambda v: format_number(v, 1)), format_number(projected.sales, 1)],
        ["Monthly Revenue", cur("revenue", lambda v: format_currency(v, compact=True)),
         format_currency(projected.revenue, compact=True)],
        ["ROI", cur("roi", format_roi), format_roi(projected.roi)],
    ]


def build_ppt(prospect: Prospect,
              current: Optional[MetricsReport],
              projected: Optional[ProjectionReport] = None,
              scaling: Optional[ScalingTimeline] = None) -> BytesIO:
    prs = Presentation()

    slide = prs.slides.add_slide(prs.slide_layouts[0])
    slide.shapes.title.text = f"Funnel Report – {prospect.business_name or prospect.name or 'Prospect'}"
    subtitle = slide.placeholders[1]
    if current:
        subtitle.text = (f"Revenue {format_currency(current.revenue, compact=True)} on "
                         f"{format_currency(current.monthly_spend, compact=True)} spend, ROI {format_roi(current.roi)}")
    else:
        subtitle.text = "Not enough data yet: daily spend and stage-1 CPA are required."

    if current:
        _add_table(_titled_slide(prs, "Current Funnel"), funnel_rows(current))

    if projected:
        s = _titled_slide(prs, "Projection")
        _add_table(s, comparison_rows(current, projected))
        box = s.shapes.add_textbox(Inches(0.5), Inches(4.0), Inches(9), Inches(1))
        box.text_frame.text = (f"Sales {projected.sales_increase:+d}%, revenue {projected.revenue_increase:+d}%, "
                               f"ROI {projected.roi_change:+.2f}x")

    if scaling and scaling.steps:
        s = _titled_slide(prs, f"Scaling Plan – {scaling.total_steps} steps over {scaling.total_days} days")
        rows = [["Step", "Day", "Daily Budget"]]
        for st in scaling.steps:
            rows.append([f"Step {st.step}" + (" (target)" if st.is_target else ""), f"Day {st.day}",
                         format_currency(st.budget)])
        _add_table(s, rows, top=1.3)

    bio = BytesIO()
    prs.save(bio)
    bio.seek(0)
    return bio
