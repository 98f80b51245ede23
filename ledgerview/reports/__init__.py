"""Result views (column schemas, tables) and the workbook report."""
from .views import build_tables, monthly_cash_flow_rows, insight_sections, TABLE_TITLES
from .statement_report import generate_json, generate_excel
