import asyncio
import json
import os
from pathlib import Path
from typing import Optional

import typer

from predictlab.commons.logger import setup_logging
from predictlab.commons.settings import load_cfg
from predictlab.engine.evolution_engine import EvolutionEngine
from predictlab.engine.formatting import format_cell_value, format_reference_range
from predictlab.services.report_service import ReportService, exam_list
from predictlab.validation.validators import validate_exams_or_raise

app = typer.Typer(add_completion=False, help="PredictLab exam evolution engine")


def _ensure_dir(p: str):
    os.makedirs(p, exist_ok=True)


@app.command()
def analyze(
    file: Path = typer.Argument(..., exists=True, dir_okay=False, help="JSON con los exámenes del paciente"),
    config: Optional[str] = typer.Option(None, help="settings.yaml alternativo"),
    as_json: bool = typer.Option(False, "--json", help="imprime el reporte completo en JSON"),
):
    """Analiza el histórico de exámenes de un paciente e imprime comparación y parecer."""
    cfg = load_cfg(config)
    logger = setup_logging(cfg["paths"]["logs_root"], os.getenv("LOG_LEVEL", "INFO"))
    engine = EvolutionEngine(cfg)

    records = validate_exams_or_raise(exam_list(json.loads(file.read_text(encoding="utf-8"))))
    logger.log("INFO", f"{len(records)} examen(es) leídos de {file}")
    report = engine.analyze(records)

    if as_json:
        typer.echo(json.dumps(report, ensure_ascii=False, indent=2))
        return

    comparison = report["comparison"]
    typer.echo(f"Modo de comparación: {comparison['mode']}")
    for row in comparison["rows"]:
        typer.echo(
            f"  {row['parameter']}: {format_cell_value(row['latest_value'], row['unit'])}"
            f" | anterior {format_cell_value(row['previous_value'], row['unit'])}"
            f" | ref {format_reference_range(row['ref_min'], row['ref_max'])}"
            f" | {row['change_text']}"
        )
    for sentence in report["insights"].values():
        typer.echo(f"- {sentence}")

    verdict = report["verdict"]
    if verdict is None:
        typer.echo("No evolution analysis yet.")
        return
    typer.echo(verdict["summary"])
    for insight in verdict["insights"]:
        typer.echo(f"  • {insight}")


@app.command()
def backlog(
    config: Optional[str] = typer.Option(None, help="settings.yaml alternativo"),
    glob_pat: str = typer.Option("*.json", "--glob", help="patrón de archivos en el inbox"),
):
    """Procesa todos los JSON pendientes del inbox y escribe los reportes en archive/."""
    cfg = load_cfg(config)
    logger = setup_logging(cfg["paths"]["logs_root"], os.getenv("LOG_LEVEL", "INFO"))
    logger.log("INFO", "Iniciando lectura de exámenes pendientes por procesar")
    _ensure_dir(cfg["paths"]["inbox"])

    svc = ReportService(EvolutionEngine(cfg), cfg["paths"])
    done = asyncio.run(svc.run_file_mode(glob_pat))
    logger.log("INFO", f"{done} reporte(s) generados")


if __name__ == "__main__":
    app()
