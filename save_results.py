import logging

import numpy as np
import pandas as pd

import thermompnn_paths
from shell_commands import run_command

# this file looks at the ThermoMPNN-D output and saves it to the workspace.

logger = logging.getLogger(__name__)


def summarize_predictions(path_to_csv):
    '''reads the ThermoMPNN-D csv, and logs how many predictions it holds,
    and the mean and lowest ddG if there is a ddG column.
    Returns the number of predictions'''
    try:
        predictions = pd.read_csv(path_to_csv)
    except (pd.errors.EmptyDataError, pd.errors.ParserError) as error:
        # this is only for the log, the file is saved either way
        logger.warning('could not read %s: %s', path_to_csv, error)
        return 0
    logger.info('%s holds %d predictions', path_to_csv, len(predictions))

    # the column name has changed between ThermoMPNN-D versions,
    # so look for anything that mentions ddG
    ddg_columns = [column for column in predictions.columns if 'ddg' in column.lower()]
    if ddg_columns and len(predictions) > 0:
        ddgs = pd.to_numeric(predictions[ddg_columns[0]], errors='coerce').to_numpy(dtype=float)
        ddgs = ddgs[~np.isnan(ddgs)]
        if ddgs.size:
            logger.info('%s: mean %.3f, lowest %.3f', ddg_columns[0], np.mean(ddgs), np.min(ddgs))
    return len(predictions)


def result_folder(output_path, output_file):
    # results go into the hidden job folder next to the job object
    return '{}/.{}'.format(output_path.rstrip('/'), output_file)


def save_results(path_to_csv, output_path, output_file):
    '''copies the result csv into the job's result folder in the workspace,
    typed as csv. Returns the workspace path'''
    summarize_predictions(path_to_csv)
    workspace_path = '{}/{}.csv'.format(result_folder(output_path, output_file),
                                        thermompnn_paths.thermompnn_out_prefix)
    command = [thermompnn_paths.path_to_p3_cp, '-f', '-m', 'csv=csv',
               path_to_csv, 'ws:' + workspace_path]
    run_command(command, 'Failure saving results to the workspace')
    return workspace_path
