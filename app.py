from __future__ import annotations

import logging

import streamlit as st

from dashboard.charts import BAR_CHART, LINE_CHART, SCATTER_CHART, build_charts
from dashboard.state import bootstrap_state, clear_results
from dashboard.theme import apply_streamlit_theme, sidebar_mode_toggle
from sales_insights.errors import SalesDataError
from sales_insights.logging_setup import setup_logging
from sales_insights.pipeline import AnalysisResult, process_upload
from sales_insights.summary import format_currency, generate_summary

APP_TITLE = "Análisis de Ventas"

logger = logging.getLogger("sales_insights.app")


def _handle_upload(upload) -> None:
    settings = st.session_state.settings
    slot = st.session_state.upload_slot
    messages = st.session_state.messages
    upload_id = getattr(upload, "file_id", None) or (upload.name, upload.size)
    if slot.is_handled(upload_id):
        return

    messages.show_processing()
    clear_results()
    try:
        result = process_upload(slot, upload_id, upload.name, upload.getvalue(), settings)
    except SalesDataError as exc:
        logger.warning("Upload %s rejected: %s", upload.name, exc)
        messages.show_error(exc)
        clear_results()
        return
    except Exception as exc:
        logger.exception("Unexpected failure while processing %s", upload.name)
        messages.show_error(exc)
        clear_results()
        return
    build_charts(st.session_state.charts, result.records)


def _render_message() -> None:
    message = st.session_state.messages.current()
    if message is None:
        return
    if message.kind == "error":
        st.error(message.text)
    else:
        st.success(message.text)


def _render_results(result: AnalysisResult) -> None:
    insights = result.insights
    col1, col2, col3 = st.columns(3)
    col1.metric("Ventas totales", format_currency(insights.total_sales))
    col2.metric("Ventas promedio", format_currency(insights.average_sales))
    col3.metric(
        "Producto más vendido",
        insights.top_product,
        help=f"Ventas: {format_currency(insights.top_product_sales)}",
    )
    st.markdown(generate_summary(result.insights, record_count=len(result.records)))

    registry = st.session_state.charts
    left, right = st.columns(2)
    for column, chart_id in ((left, BAR_CHART), (right, LINE_CHART)):
        handle = registry.get(chart_id)
        if handle is not None:
            with column:
                st.plotly_chart(handle.figure, use_container_width=True, key=chart_id)
    handle = registry.get(SCATTER_CHART)
    if handle is not None:
        st.plotly_chart(handle.figure, use_container_width=True, key=SCATTER_CHART)


def main() -> None:
    st.set_page_config(page_title=APP_TITLE, layout="wide")
    settings = bootstrap_state()
    setup_logging(settings.log_level)

    theme_mode = sidebar_mode_toggle()
    apply_streamlit_theme(theme_mode)

    st.title(APP_TITLE)
    st.caption("Sube una exportación de ventas con columnas de fecha, producto y ventas.")

    upload = st.file_uploader(
        "Selecciona un archivo CSV o Excel",
        type=[suffix.lstrip(".") for suffix in settings.extensions],
    )
    if upload is not None:
        _handle_upload(upload)

    _render_message()
    result = st.session_state.upload_slot.result
    if result is not None:
        _render_results(result)


if __name__ == "__main__":
    main()
