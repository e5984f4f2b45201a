from resale_reports.config import set_config_for_test
from resale_reports.logging import AppLogger, get_logger


def test_level_follows_config():
    set_config_for_test(_env_file=None, log_level="debug")
    get_logger(__name__)
    assert AppLogger._level == "DEBUG"

    set_config_for_test(_env_file=None, log_level="ERROR")
    get_logger(__name__)
    assert AppLogger._level == "ERROR"


def test_bound_component(capsys):
    set_config_for_test(_env_file=None, log_level="INFO")
    get_logger("resale_reports.analytics.report").info("report built")
    sink_id = AppLogger._sink_id
    get_logger().info("no component")

    assert AppLogger._sink_id == sink_id
    err = capsys.readouterr().err
    assert "resale_reports.analytics.report" in err
    assert "report built" in err
    assert "no component" in err
