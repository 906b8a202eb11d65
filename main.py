# main.py
import argparse
import logging
from pathlib import Path

from infra.db.base import build_engine, build_session_factory, default_db_url
from infra.logging_config import setup_logging
from infra.migrate import run_migrations
from infra.operational_support import bind_trace_id
from infra.path import default_reports_dir
from infra.services import ServiceGraph, build_service_graph

from core.reporting import api as reporting_api

logger = logging.getLogger(__name__)


def build_services(db_url: str | None = None) -> ServiceGraph:
    url = db_url or default_db_url()
    run_migrations(db_url=url)
    session = build_session_factory(build_engine(url))()
    return build_service_graph(session)


def seed_sample_data(services: ServiceGraph) -> None:
    if services.funding_service.list_instruments():
        logger.info("Ledger already holds data, skipping sample seed")
        return
    fs = services.funding_service
    ws = services.work_order_service

    network = fs.create_instrument("Technology", 20000.0, code="IDV-TEC-01", motivation="Operating budget")
    hall = fs.create_instrument("Infrastructure", 6000.0, code="IDV-INF-01", motivation="Public fund A")
    reserve = fs.create_instrument("Infrastructure", 4000.0, code="IDV-INF-02", motivation="Strategic reserve")

    office = ws.create_order("ORD-2024-001", "Office network upgrade", 15000.0, [network.id])
    ws.record_contract(office.id, 13200.0, contractor="NetSolutions S.r.l.")
    ws.record_payment(office.id, 13200.0)

    lobby = ws.create_order("ORD-2024-002", "Hall renovation and painting", 8500.0, [hall.id, reserve.id])
    ws.record_contract(lobby.id, 8000.0, contractor="Edilizia Creativa Co.")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Export the works budget chapter summary.")
    parser.add_argument("--db-url", default=None, help="SQLAlchemy URL (defaults to the per-user SQLite file)")
    parser.add_argument("--out", type=Path, default=None, help="Directory for the generated reports")
    parser.add_argument("--seed", action="store_true", help="Load sample instruments and orders into an empty ledger")
    args = parser.parse_args(argv)

    setup_logging()
    with bind_trace_id():
        services = build_services(args.db_url)
        try:
            if args.seed:
                seed_sample_data(services)
            out_dir = args.out or default_reports_dir()
            excel = reporting_api.generate_excel_report(services.ledger_service, out_dir / "chapter_summary.xlsx")
            pdf = reporting_api.generate_pdf_report(
                services.ledger_service,
                out_dir / "chapter_summary.pdf",
                temp_dir=out_dir / "tmp",
            )
            logger.info("Reports written: %s, %s", excel, pdf)
        finally:
            services.session.close()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
