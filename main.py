# main.py
import logging
import os
import sys
from pathlib import Path
from typing import Optional

import pandas as pd

from streamta.core import ConfigLoader, setup_logging, build_indicators
from streamta.frame import run_many


def main(config_path: Optional[str] = None) -> pd.DataFrame:
    """Compute the configured indicator set over an OHLCV CSV file."""
    project_root = Path(__file__).resolve().parent
    if config_path is None:
        config_path = sys.argv[1] if len(sys.argv) > 1 else str(project_root / 'config.yml')
    config_loader = ConfigLoader(config_path=str(config_path))

    # Setup logging
    log_config = config_loader.get('logging')
    if log_config:
        file_handler = log_config.get('handlers', {}).get('file')
        if file_handler and os.path.dirname(file_handler['filename']):
            os.makedirs(os.path.dirname(file_handler['filename']), exist_ok=True)
    setup_logging(log_config)

    data_settings = config_loader.get('data_settings', {})
    input_csv = data_settings['input_csv']
    date_column = data_settings.get('date_column')

    logging.info(f"Loading OHLCV data from {input_csv}...")
    df = pd.read_csv(input_csv)
    if date_column and date_column in df.columns:
        df[date_column] = pd.to_datetime(df[date_column])
        df = df.set_index(date_column)

    if df.empty:
        logging.warning(f"No rows in {input_csv}, nothing to compute.")

    indicators = build_indicators(config_loader.get_all())
    logging.info(f"Computing {len(indicators)} indicators over {len(df)} bars...")
    result = run_many(indicators, df)

    output_csv = data_settings.get('output_csv')
    if output_csv:
        if os.path.dirname(output_csv):
            os.makedirs(os.path.dirname(output_csv), exist_ok=True)
        result.to_csv(output_csv)
        logging.info(f"Indicator values saved to: {output_csv}")

    return result


if __name__ == "__main__":
    main()
