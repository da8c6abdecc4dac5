from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

import pandas as pd

from forecast_client import load_config
from forecast_client.api import ForecastApiClient, ForecastApiError
from forecast_client.evaluation import bin_values, error_values, sturges, summarize_metrics
from forecast_client.exog import map_from_csv, map_to_matrix, template_rows
from forecast_client.io import read_csv_file, serialize_csv, write_csv_file
from forecast_client.normalization import apply_clip, forecast_csv_rows, forecast_to_frame
from forecast_client.schemas import AutoPredictRequest, ManualMatrixPredictRequest, PredictFlags

logger = logging.getLogger(__name__)


def _client(args: argparse.Namespace) -> ForecastApiClient:
    cfg = load_config(args.config)
    if args.api_base:
        cfg = cfg.model_copy(update={"api_base": args.api_base})
    return ForecastApiClient(cfg)


def _cmd_predict(args: argparse.Namespace) -> int:
    client = _client(args)

    if args.exog_csv:
        columns = client.debug_exog().expected_exog_used_by_forecast
        exog = map_from_csv(read_csv_file(args.exog_csv), columns, args.horizon)
        body = ManualMatrixPredictRequest(
            horizon=args.horizon,
            frequency=args.frequency,
            alpha=args.alpha,
            exog=map_to_matrix(exog, columns, args.horizon),
        )
    else:
        body = AutoPredictRequest(
            horizon=args.horizon,
            frequency=args.frequency,
            alpha=args.alpha,
            flags=PredictFlags(exog_strategy=args.strategy),
        )

    resp = client.predict(body)
    defaults = client.config.defaults
    points = apply_clip(resp.forecasts, clip_non_negative=defaults.clip_non_negative, floor=defaults.floor)

    for warning in resp.warnings:
        logger.warning(warning)

    if args.out:
        write_csv_file(args.out, forecast_csv_rows(points))
        print(f"[{resp.model_name}] {len(points)} periods -> {args.out}")
    else:
        df = forecast_to_frame(points).drop(columns=["date"])
        print(f"[{resp.model_name}] exog_mode={resp.exog_mode} generated_at={resp.generated_at}")
        print(df.to_string(index=False))
    return 0


def _cmd_metrics(args: argparse.Namespace) -> int:
    client = _client(args)
    resp = client.metrics(args.start, args.end, args.alpha)
    kpis = summarize_metrics(resp)

    print(f"window {resp.eval_window.start} .. {resp.eval_window.end} (n={resp.eval_window.n})")
    print(
        f"MAE {kpis.mae} | RMSE {kpis.rmse} | MAPE {kpis.mape_pct:.2f}% | "
        f"sMAPE {kpis.smape_pct:.2f}% | bias {kpis.bias} ({kpis.bias_trend})"
    )
    if kpis.coverage_pct is not None:
        print(f"coverage {kpis.coverage_pct:.1f}%")

    bins = args.bins or sturges(len(resp.by_period))
    hist = bin_values(error_values(resp.by_period, args.mode), bins, args.mode)
    if hist:
        peak = max(b.count for b in hist) or 1
        table = pd.DataFrame(
            {
                "range": [f"{b.x0:,.2f} .. {b.x1:,.2f}" for b in hist],
                "count": [b.count for b in hist],
                "bar": ["#" * round(40 * b.count / peak) for b in hist],
            }
        )
        print(table.to_string(index=False))
    return 0


def _cmd_template(args: argparse.Namespace) -> int:
    columns = [c.strip() for c in args.columns.split(",") if c.strip()]
    rows = template_rows(columns, args.horizon)
    if args.out:
        write_csv_file(args.out, rows)
    else:
        print(serialize_csv(rows))
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="forecast-client")
    parser.add_argument("--config", default=None, help="Path to YAML config")
    parser.add_argument("--api-base", default=None, help="Override the service base URL")
    parser.add_argument("-v", "--verbose", action="store_true")
    sub = parser.add_subparsers(dest="cmd", required=True)

    p_pred = sub.add_parser("predict", help="Request a forecast")
    p_pred.add_argument("--horizon", type=int, default=14)
    p_pred.add_argument("--frequency", default="D", choices=["D", "W", "M"])
    p_pred.add_argument("--alpha", type=float, default=None)
    p_pred.add_argument("--strategy", default=None, choices=["zeros", "smart"])
    p_pred.add_argument("--exog-csv", type=Path, default=None, help="Manual exogenous drivers (CSV)")
    p_pred.add_argument("--out", type=Path, default=None, help="Write forecast CSV here")
    p_pred.set_defaults(func=_cmd_predict)

    p_met = sub.add_parser("metrics", help="Evaluate the model over a window")
    p_met.add_argument("--start", required=True, help="ISO date, e.g. 2025-01-01")
    p_met.add_argument("--end", required=True, help="ISO date, e.g. 2025-03-31")
    p_met.add_argument("--alpha", type=float, default=None)
    p_met.add_argument("--bins", type=int, default=None)
    p_met.add_argument("--mode", default="residual", choices=["residual", "absolute"])
    p_met.set_defaults(func=_cmd_metrics)

    p_tpl = sub.add_parser("template", help="Zero-filled exogenous CSV template")
    p_tpl.add_argument("--columns", required=True, help="Comma-separated, in model order")
    p_tpl.add_argument("--horizon", type=int, required=True)
    p_tpl.add_argument("--out", type=Path, default=None)
    p_tpl.set_defaults(func=_cmd_template)

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s | %(name)s | %(levelname)s | %(message)s",
    )

    try:
        return int(args.func(args))
    except ForecastApiError as exc:
        print(f"error: {exc.message}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
