# predictlab/services/report_service.py
import asyncio
import json
import os
import re
import shutil
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from predictlab.commons.logger import logger
from predictlab.engine.evolution_engine import EvolutionEngine
from predictlab.validation.validators import validate_exams_or_raise


def generate_report_filename(source: str, patient_id: Optional[str] = None, extension: str = "json") -> str:
    """
    Genera nombre de archivo para el reporte, con timestamp y origen.
    Ej: 20250821-170605-123456_patient_42_exams_export.json
    """
    if not isinstance(source, str):
        raise TypeError(f"Invalid type for source: expected str, got {type(source).__name__}")

    ts = datetime.now(timezone.utc).strftime("%Y%m%d-%H%M%S-%f")  # Para orden natural
    base_name = os.path.splitext(os.path.basename(source))[0]
    safe_base = re.sub(r"[^a-zA-Z0-9_\-]", "_", base_name)
    patient = re.sub(r"\W", "_", patient_id) if patient_id else "unknown"
    return f"{ts}_patient_{patient}_{safe_base}.{extension}"


def exam_list(data):
    # acepta una lista de exámenes, {"exams": [...]} o un examen suelto
    if isinstance(data, dict):
        if "exams" in data:
            return data["exams"] or []
        return [data]
    if isinstance(data, list):
        return data
    # cualquier otro valor JSON se entrega tal cual para que la validación lo rechace
    return [data]


class ReportService:
    def __init__(self, engine: EvolutionEngine, paths: dict):
        self.engine = engine
        self.paths = paths
        Path(paths["archive"]).mkdir(parents=True, exist_ok=True)
        Path(paths["error"]).mkdir(parents=True, exist_ok=True)

    def _reject(self, src: Path, text: str, reason: str):
        errp = Path(self.paths["error"]) / src.name
        errp.write_text(text, encoding="utf-8")
        logger.error(f"Archivo rechazado {src.name}: {reason}")

    def process_text(self, text: str, src: str) -> Optional[Path]:
        """Valida, analiza y escribe el reporte JSON; devuelve su ruta o None si se rechazó."""
        src_path = Path(src)
        try:
            records = validate_exams_or_raise(exam_list(json.loads(text)))
        except json.JSONDecodeError as je:
            self._reject(src_path, text, f"JSON inválido: {je}")
            return None
        except ValidationError as ve:
            self._reject(src_path, text, f"Validación falló: {ve}")
            return None

        report = self.engine.analyze(records)
        filename = generate_report_filename(src, report["patient_id"])
        out_json = Path(self.paths["archive"]) / filename
        out_json.write_text(json.dumps(report, ensure_ascii=False, indent=2), encoding="utf-8")
        logger.info(f"Reporte de evolución generado: {out_json}")
        return out_json

    def process_file(self, path: str) -> Optional[Path]:
        src = Path(path)
        raw = src.read_bytes()
        try:
            text = raw.decode("utf-8")
        except UnicodeDecodeError as ue:
            # se conserva el contenido original byte a byte
            (Path(self.paths["error"]) / src.name).write_bytes(raw)
            logger.error(f"Archivo rechazado {src.name}: no es UTF-8 ({ue})")
            src.unlink()
            return None
        out = self.process_text(text, str(src))
        # el origen procesado se mueve a archive/source/
        if out is not None and src.exists():
            dst_dir = Path(self.paths["archive"]) / "source"
            dst_dir.mkdir(parents=True, exist_ok=True)
            shutil.move(str(src), str(dst_dir / src.name))
        elif out is None and src.exists():
            src.unlink()
        return out

    async def run_file_mode(self, glob_pat: str = "*.json") -> int:
        """Procesa el backlog del inbox; devuelve cuántos reportes se generaron."""
        inbox = Path(self.paths["inbox"])
        files = sorted(inbox.glob(glob_pat))
        if not files:
            return 0
        logger.info(f"Backlog detectado: {len(files)} archivo(s) en {inbox}")
        done = 0
        for f in files:
            # Asegura que un fallo no detenga el backlog completo
            try:
                if self.process_file(str(f)) is not None:
                    done += 1
            except Exception as ex:
                logger.exception(f"Fallo inesperado con {f}: {ex}")
            await asyncio.sleep(0)
        return done
