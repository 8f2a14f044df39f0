"""End-to-end test of the CSV runner."""

import pandas as pd
import pytest
import yaml

from main import main


@pytest.fixture
def run_config(tmp_path, ohlcv_frame):
    input_csv = tmp_path / 'ohlcv.csv'
    frame = ohlcv_frame.rename_axis('date').reset_index()
    frame.to_csv(input_csv, index=False)

    config = {
        'data_settings': {
            'input_csv': str(input_csv),
            'output_csv': str(tmp_path / 'results' / 'indicators.csv'),
            'date_column': 'date',
        },
        'indicators': {
            'trend': {'type': 'sma', 'params': {'period': 10}},
            'bands': {'type': 'bollinger_bands', 'params': {'period': 20, 'multiplier': 2.0}},
            'flow': {'type': 'mfi'},
        },
        'logging': {
            'version': 1,
            'disable_existing_loggers': False,
            'handlers': {
                'file': {
                    'class': 'logging.FileHandler',
                    'filename': str(tmp_path / 'logs' / 'run.log'),
                },
            },
            'root': {'level': 'INFO', 'handlers': ['file']},
        },
    }
    path = tmp_path / 'config.yml'
    path.write_text(yaml.safe_dump(config, sort_keys=False))
    return path


def test_main_writes_indicator_columns(run_config, tmp_path, ohlcv_frame):
    result = main(str(run_config))

    assert list(result.columns) == ['trend', 'bands.average', 'bands.upper', 'bands.lower', 'flow']
    assert len(result) == len(ohlcv_frame)
    assert result.index.name == 'date'
    assert result['trend'].tolist() == pytest.approx(
        ohlcv_frame['close'].rolling(10, min_periods=1).mean().tolist())

    written = pd.read_csv(tmp_path / 'results' / 'indicators.csv', index_col='date')
    assert list(written.columns) == list(result.columns)
    assert (tmp_path / 'logs' / 'run.log').exists()
