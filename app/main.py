"""
Streamlit Frontend for Personal Finance Tracker

Two views share one entry list:
1. Dashboard - totals, add-entry form, recent / categories / analytics tabs
2. Calendar - month grid toned by daily balance, day detail panel

Every mutation runs in a widget callback, so the page that renders
afterwards is always built from the updated entry list.
"""

from datetime import date
from typing import Optional

import streamlit as st

from finance_tracker.analytics import format_amount, format_ratio, format_savings_rate
from finance_tracker.audit import configure_logging
from finance_tracker.calendar import WEEKDAY_LABELS, CalendarCursor, grid_weeks
from finance_tracker.config import get_settings, validate_all_settings
from finance_tracker.export import ImportFormatError
from finance_tracker.models.aggregates import CalendarCell, DayTone
from finance_tracker.models.entry import SUGGESTED_CATEGORIES, Entry, EntryDraft, EntryKind
from finance_tracker.tracker import FinanceTracker, create_app_components


# Page configuration
st.set_page_config(
    page_title="Gestión de Gastos e Ingresos",
    page_icon="💰",
    layout="wide",
    initial_sidebar_state="expanded",
)

# Custom CSS for the summary cards
st.markdown("""
<style>
    .stButton>button {
        width: 100%;
    }
    .income-box {
        padding: 16px;
        background-color: #f0fdf4;
        border-radius: 10px;
        border-left: 5px solid #16a34a;
        margin: 6px 0;
    }
    .expense-box {
        padding: 16px;
        background-color: #fef2f2;
        border-radius: 10px;
        border-left: 5px solid #dc2626;
        margin: 6px 0;
    }
    .balance-box {
        padding: 16px;
        background-color: #eff6ff;
        border-radius: 10px;
        border-left: 5px solid #2563eb;
        margin: 6px 0;
    }
    .deficit-box {
        padding: 16px;
        background-color: #fff7ed;
        border-radius: 10px;
        border-left: 5px solid #ea580c;
        margin: 6px 0;
    }
    .big-number {
        font-size: 1.8em;
        font-weight: bold;
        color: #1f2937;
    }
</style>
""", unsafe_allow_html=True)


TONE_MARKERS = {
    DayTone.SURPLUS: "🟢",
    DayTone.DEFICIT: "🔴",
    DayTone.EVEN: "🟡",
    DayTone.EMPTY: "",
}

# Widget keys of the add-entry form
FORM_KEYS = ("form_kind", "form_category", "form_amount", "form_date", "form_description")


@st.cache_resource
def get_components() -> FinanceTracker:
    """Get or create the tracker (cached)."""
    app_settings = get_settings().app
    configure_logging(app_settings.log_level, app_settings.log_json)
    try:
        return create_app_components(use_storage=True)
    except Exception as e:
        st.error(f"Failed to initialize storage: {e}")
        return create_app_components(use_storage=False)


def money(amount: float) -> str:
    # "$" opens inline math in Streamlit markdown
    return format_amount(amount, get_settings().app.currency_symbol).replace("$", "\\$")


def summary_card(title: str, amount: float, css_class: str) -> None:
    # Raw HTML block, no markdown escaping
    amount_text = format_amount(amount, get_settings().app.currency_symbol)
    st.markdown(f"""
    <div class="{css_class}">
        <div>{title}</div>
        <div class="big-number">{amount_text}</div>
    </div>
    """, unsafe_allow_html=True)


def main():
    """Main application entry point."""
    tracker = get_components()

    st.sidebar.title("💰 Gastos e Ingresos")
    st.sidebar.markdown("---")

    page = st.sidebar.radio(
        "Ir a:",
        ["📊 Dashboard", "📅 Calendario", "⚙️ Ajustes"],
        index=0,
    )

    if not tracker.store.in_sync:
        st.sidebar.warning(
            "Los últimos cambios no se pudieron guardar. "
            "Se reintentará en el próximo cambio."
        )

    if page == "📊 Dashboard":
        render_dashboard_page(tracker)
    elif page == "📅 Calendario":
        render_calendar_page(tracker)
    elif page == "⚙️ Ajustes":
        render_settings_page(tracker)


# =============================================================================
# DASHBOARD
# =============================================================================

def submit_entry(tracker: FinanceTracker) -> None:
    """Callback of the add-entry button."""
    state = st.session_state
    draft = EntryDraft(
        kind=state.form_kind,
        category=state.form_category or "",
        amount=state.form_amount or "",
        date=state.form_date or date.today(),
        description=state.form_description or "",
    )
    entry = tracker.add_from_draft(draft)
    if entry is None:
        state.form_message = "Completa la categoría y un monto válido."
        return

    state.form_message = None
    for key in FORM_KEYS:
        state.pop(key, None)


def reset_category() -> None:
    st.session_state.form_category = None


def render_dashboard_page(tracker: FinanceTracker):
    """Render the dashboard."""
    st.title("Gestión de Gastos e Ingresos")
    st.markdown("Controla tus finanzas de manera eficiente")

    model = tracker.dashboard()
    totals = model.totals

    col1, col2, col3 = st.columns(3)
    with col1:
        summary_card("Ingresos Totales", totals.income_total, "income-box")
    with col2:
        summary_card("Gastos Totales", totals.expense_total, "expense-box")
    with col3:
        summary_card(
            "Balance",
            totals.balance,
            "balance-box" if totals.balance >= 0 else "deficit-box",
        )

    render_export_import(tracker)
    render_add_entry_form(tracker)

    tab_recent, tab_categories, tab_analytics = st.tabs(
        ["Entradas Recientes", "Por Categorías", "Análisis"]
    )

    with tab_recent:
        if not model.recent:
            st.info("No hay entradas registradas")
        for index, entry in enumerate(model.recent):
            render_entry_row(tracker, entry, deletable=True, row=index)

    with tab_categories:
        col1, col2 = st.columns(2)
        with col1:
            st.subheader("Gastos por Categoría")
            for share in model.expense_categories:
                st.markdown(f"**{share.category}** · {money(share.amount)}")
                st.progress(min(max(share.percent, 0.0), 100.0) / 100)
        with col2:
            st.subheader("Ingresos por Categoría")
            for share in model.income_categories:
                st.markdown(f"**{share.category}** · {money(share.amount)}")
                st.progress(min(max(share.percent, 0.0), 100.0) / 100)

    with tab_analytics:
        analytics = model.analytics
        col1, col2 = st.columns(2)
        with col1:
            st.markdown("#### Resumen del Período")
            st.markdown(f"Total de entradas: **{analytics.entry_count}**")
            st.markdown(f"Promedio de gastos: **{money(analytics.average_expense)}**")
            st.markdown(f"Promedio de ingresos: **{money(analytics.average_income)}**")
        with col2:
            st.markdown("#### Estado Financiero")
            st.markdown(
                f"Ratio Ingreso/Gasto: **{format_ratio(analytics.income_expense_ratio)}**"
            )
            st.markdown(f"Tasa de ahorro: **{format_savings_rate(analytics.savings_rate)}**")
            if analytics.is_surplus:
                st.success("✓ Superávit")
            else:
                st.warning("⚠ Déficit")


def render_export_import(tracker: FinanceTracker):
    filename, payload = tracker.export()

    col1, col2 = st.columns([1, 2])
    with col1:
        st.download_button(
            "⬇️ Exportar Datos",
            data=payload,
            file_name=filename,
            mime="application/json",
            on_click=tracker.record_export,
            args=(filename,),
        )
    with col2:
        with st.expander("⬆️ Importar Datos"):
            st.caption("Reemplaza todas las entradas por las del archivo.")
            uploaded = st.file_uploader("Archivo JSON exportado", type=["json"])
            if uploaded and st.button("Importar", type="primary"):
                try:
                    count = tracker.import_json(uploaded.getvalue().decode("utf-8"))
                except UnicodeDecodeError:
                    st.error("El archivo no es texto UTF-8.")
                except ImportFormatError as e:
                    st.error(f"No se pudo importar: {e}")
                else:
                    st.success(f"{count} entradas importadas.")
                    st.rerun()


def render_add_entry_form(tracker: FinanceTracker):
    st.markdown("### ➕ Agregar Nueva Entrada")

    col1, col2, col3, col4, col5 = st.columns(5)
    with col1:
        kind = st.selectbox(
            "Tipo",
            options=list(EntryKind),
            format_func=lambda k: k.label,
            key="form_kind",
            on_change=reset_category,
        )
    with col2:
        st.selectbox(
            "Categoría",
            options=list(SUGGESTED_CATEGORIES[kind]),
            index=None,
            placeholder="Seleccionar categoría",
            key="form_category",
        )
    with col3:
        st.text_input("Monto", placeholder="0.00", key="form_amount")
    with col4:
        st.date_input("Fecha", value=date.today(), format="YYYY-MM-DD", key="form_date")
    with col5:
        st.text_input("Descripción", placeholder="Opcional", key="form_description")

    st.button(
        "Agregar Entrada",
        type="primary",
        on_click=submit_entry,
        args=(tracker,),
    )
    message = st.session_state.get("form_message")
    if message:
        st.warning(message)


def render_entry_row(tracker: FinanceTracker, entry: Entry, deletable: bool, row: int = 0):
    col1, col2, col3, col4 = st.columns([1, 4, 2, 1])
    with col1:
        st.markdown("🟢 Ingreso" if entry.is_income else "🔴 Gasto")
    with col2:
        line = f"**{entry.category}**  \n{entry.date.strftime('%d/%m/%Y')}"
        if entry.description:
            line += f" • {entry.description}"
        st.markdown(line)
    with col3:
        color = "green" if entry.is_income else "red"
        st.markdown(f":{color}[**{money(entry.amount)}**]")
    with col4:
        if deletable:
            st.button(
                "🗑️",
                # Ids may repeat in imported or legacy data
                key=f"delete_{row}_{entry.id}",
                on_click=tracker.delete_entry,
                args=(entry,),
                help="Eliminar entrada",
            )


# =============================================================================
# CALENDAR
# =============================================================================

def get_cursor() -> CalendarCursor:
    if "calendar_cursor" not in st.session_state:
        st.session_state.calendar_cursor = CalendarCursor.for_today()
    return st.session_state.calendar_cursor


def move_cursor(action: str, day: Optional[date] = None) -> None:
    cursor = get_cursor()
    if action == "prev":
        cursor = cursor.previous_month()
    elif action == "next":
        cursor = cursor.next_month()
    elif action == "today":
        cursor = CalendarCursor.for_today()
    elif action == "select" and day is not None:
        cursor = cursor.select(day)
    st.session_state.calendar_cursor = cursor


def cell_label(cell: CalendarCell) -> str:
    label = f"{cell.day.day}"
    marker = TONE_MARKERS[cell.tone]
    if marker:
        label = f"{marker} {label}"
    if not cell.in_month:
        label = f"·{label}·"
    return label


def render_calendar_page(tracker: FinanceTracker):
    """Render the month calendar."""
    st.title("📅 Calendario Financiero")

    model = tracker.calendar(get_cursor())
    month_totals = model.month_totals

    col1, col2, col3, col4 = st.columns(4)
    with col1:
        st.markdown(f"""
        <div class="balance-box">
            <div>Mes Actual</div>
            <div class="big-number">{model.month_label.capitalize()}</div>
        </div>
        """, unsafe_allow_html=True)
    with col2:
        summary_card("Ingresos del Mes", month_totals.income_total, "income-box")
    with col3:
        summary_card("Gastos del Mes", month_totals.expense_total, "expense-box")
    with col4:
        summary_card(
            "Balance del Mes",
            month_totals.balance,
            "balance-box" if month_totals.balance >= 0 else "deficit-box",
        )

    grid_col, detail_col = st.columns([3, 1])

    with grid_col:
        nav1, nav2, nav3 = st.columns([1, 3, 1])
        with nav1:
            st.button("◀", on_click=move_cursor, args=("prev",), key="cal_prev")
        with nav2:
            st.markdown(f"### {model.month_label.capitalize()}")
            st.button("Hoy", on_click=move_cursor, args=("today",), key="cal_today")
        with nav3:
            st.button("▶", on_click=move_cursor, args=("next",), key="cal_next")

        header = st.columns(7)
        for col, label in zip(header, WEEKDAY_LABELS):
            col.markdown(f"**{label}**")

        for week in grid_weeks(model.cells):
            cols = st.columns(7)
            for col, cell in zip(cols, week):
                with col:
                    is_selected = model.cursor.selected == cell.day
                    st.button(
                        cell_label(cell),
                        key=f"day_{cell.day.isoformat()}",
                        on_click=move_cursor,
                        args=("select", cell.day),
                        type="primary" if is_selected else "secondary",
                        help=money(cell.net) if cell.entry_count else None,
                    )

        st.caption("🟢 balance positivo · 🔴 balance negativo · 🟡 balance cero")

    with detail_col:
        detail = model.selected
        if detail is None:
            st.markdown("#### Selecciona un día")
            st.caption("Haz clic en un día para ver sus movimientos.")
            return

        st.markdown(f"#### Detalles del {detail.day.strftime('%d/%m/%Y')}")
        if detail.is_empty:
            st.info("No hay movimientos este día")
            return

        for entry in detail.entries:
            render_entry_row(tracker, entry, deletable=False)

        st.markdown("---")
        color = "green" if detail.net >= 0 else "red"
        st.markdown(f"Balance del día: :{color}[**{money(detail.net)}**]")


# =============================================================================
# SETTINGS
# =============================================================================

def render_settings_page(tracker: FinanceTracker):
    """Render the settings page."""
    st.title("⚙️ Ajustes")

    st.markdown("### Configuración")

    status = validate_all_settings()
    for name, key in [("Almacenamiento", "storage"), ("Aplicación", "app")]:
        if status.get(key, False):
            st.success(f"✅ {name}")
        else:
            st.error(f"❌ {name} - {status.get(f'{key}_error', 'No configurado')}")

    st.markdown(f"Clave de almacenamiento: `{tracker.store.key}`")
    st.markdown(f"Entradas guardadas: **{len(tracker.store)}**")

    st.markdown("---")
    st.markdown("### Diagnóstico")
    events = tracker.audit_logger.recent(limit=20)
    if not events:
        st.caption("Sin eventos registrados.")
    for event in events:
        st.markdown(
            f"`{event.timestamp.strftime('%H:%M:%S')}` "
            f"**{event.event_type.value}** · {event.description}"
        )

    st.markdown("---")
    st.markdown("### Borrar Datos")
    confirm = st.checkbox("Entiendo que se borrarán todas las entradas")
    if st.button("🗑️ Borrar todo", disabled=not confirm):
        tracker.clear()
        st.rerun()


if __name__ == "__main__":
    main()
