from datetime import datetime

from predictlab.commons.logger import setup_logging


def test_log_file_under_dated_directory(tmp_path):
    log = setup_logging(str(tmp_path), "INFO")
    try:
        log.info("hola")
        logfile = tmp_path / datetime.now().strftime("%Y/%m/%d") / "app.log"
        assert logfile.exists()
    finally:
        log.remove()
