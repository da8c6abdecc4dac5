import pytest

from forecast_client import cli
from forecast_client.api import ForecastApiClient, ForecastApiError
from forecast_client.api.errors import NETWORK_MESSAGE
from forecast_client.schemas import (
    DebugExog,
    ForecastPoint,
    ManualMatrixPredictRequest,
    MetricsResponse,
    PredictResponse,
)


@pytest.fixture(autouse=True)
def _no_env_base(monkeypatch):
    monkeypatch.delenv("FORECAST_API_BASE", raising=False)


@pytest.fixture
def sent(monkeypatch):
    bodies = []

    def fake_predict(self, body):
        bodies.append(body)
        return PredictResponse(
            model_name="sarimax_hotel",
            horizon=2,
            freq="D",
            exog_mode="manual",
            forecasts=[
                ForecastPoint(ds="2025-01-02", yhat=-3.0, yhat_lower=-8.0, yhat_upper=2.0),
                ForecastPoint(ds="2025-01-03", yhat=12.5),
            ],
        )

    monkeypatch.setattr(ForecastApiClient, "predict", fake_predict)
    return bodies


def test_template_to_stdout(capsys):
    assert cli.main(["template", "--columns", "ADR, Weekend ,", "--horizon", "2"]) == 0
    assert capsys.readouterr().out.strip() == "ADR,Weekend\n0,0\n0,0"


def test_template_to_file(tmp_path):
    out = tmp_path / "tpl.csv"
    assert cli.main(["template", "--columns", "ADR", "--horizon", "1", "--out", str(out)]) == 0
    assert out.read_text(encoding="utf-8") == "ADR\n0"


def test_predict_prints_clipped_table(sent, capsys):
    assert cli.main(["predict", "--horizon", "2", "--strategy", "zeros"]) == 0
    out = capsys.readouterr().out
    assert "sarimax_hotel" in out
    assert "-3.0" not in out
    assert sent[0].flags.exog_strategy == "zeros"


def test_predict_with_exog_csv_writes_forecast(sent, monkeypatch, tmp_path):
    monkeypatch.setattr(
        ForecastApiClient,
        "debug_exog",
        lambda self: DebugExog(expected_exog_used_by_forecast=["ADR", "Weekend"]),
    )
    exog_csv = tmp_path / "exog.csv"
    exog_csv.write_text("Weekend,ADR\n1,100\n0,\"1,250\"\n", encoding="utf-8")
    out = tmp_path / "forecast.csv"

    code = cli.main(["predict", "--horizon", "2", "--exog-csv", str(exog_csv), "--out", str(out)])
    assert code == 0

    body = sent[0]
    assert isinstance(body, ManualMatrixPredictRequest)
    assert body.exog.columns == ["ADR", "Weekend"]
    assert body.exog.rows == [[100.0, 1.0], [1250.0, 0.0]]

    lines = out.read_text(encoding="utf-8").split("\n")
    assert lines[0] == "ds,yhat,yhat_lower,yhat_upper"
    assert lines[1] == "2025-01-02,0,0,2"
    assert lines[2] == "2025-01-03,12.5,,"


def test_metrics_prints_kpis_and_histogram(monkeypatch, capsys):
    response = MetricsResponse.model_validate(
        {
            "eval_window": {"start": "2025-01-01", "end": "2025-01-03", "n": 3},
            "metrics": {"mae": 2.4, "rmse": 3.1, "mape": 0.125, "smape": 0.11, "bias_me": 1.2, "coverage_95": 0.9},
            "by_period": [
                {"ds": "2025-01-01", "y": 10, "yhat": 8},
                {"ds": "2025-01-02", "y": 9, "yhat": 10},
                {"ds": "2025-01-03", "y": 12, "yhat": 12},
            ],
        }
    )
    monkeypatch.setattr(ForecastApiClient, "metrics", lambda self, start, end, alpha=None: response)

    assert cli.main(["metrics", "--start", "2025-01-01", "--end", "2025-01-03"]) == 0
    out = capsys.readouterr().out
    assert "MAPE 12.50%" in out
    assert "(up)" in out
    assert "coverage 90.0%" in out
    assert "#" in out


def test_api_errors_exit_with_one(monkeypatch, capsys):
    def fail(self, body):
        raise ForecastApiError(NETWORK_MESSAGE, kind="network")

    monkeypatch.setattr(ForecastApiClient, "predict", fail)
    assert cli.main(["predict"]) == 1
    assert NETWORK_MESSAGE in capsys.readouterr().err
