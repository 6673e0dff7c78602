import logging
import os

import thermompnn_paths
from shell_commands import run_command
from stability_errors import ExternalCommandError

# this file builds the ThermoMPNN-D command line and runs it.

logger = logging.getLogger(__name__)


def allocated_threads():
    '''the number of threads the scheduler gave us, 1 if it did not say'''
    value = os.environ.get(thermompnn_paths.allocated_cpu_variable, '')
    if not value.strip():
        return 1
    try:
        return max(1, int(value))
    except ValueError:
        logger.warning('%s=%r is not a number, running with 1 thread',
                       thermompnn_paths.allocated_cpu_variable, value)
        return 1


def thermompnn_command(path_to_pdb, mode, batch_size, chains, threshold, distance, ss_penalty, threads):
    '''Returns the ThermoMPNN-D call as a list of arguments'''
    command = [thermompnn_paths.path_to_thermompnn,
               '--mode', str(mode),
               '--pdb', path_to_pdb,
               '--batch_size', str(batch_size),
               '--out', thermompnn_paths.thermompnn_out_prefix]
    # ThermoMPNN-D crashes on an empty --chains, it then defaults to looking for A.
    # so only pass it when chains were asked for
    if chains:
        command += ['--chains', chains]
    command += ['--threshold', str(threshold),
                '--distance', str(distance)]
    if ss_penalty:
        command.append('--ss_penalty')
    command += ['--threads', str(threads)]
    return command


def run_thermompnn(path_to_pdb, params, work_dir, threads=None):
    '''runs ThermoMPNN-D on the pdb with the job parameters, in work_dir.
    Returns the path to the csv file it wrote'''
    if threads is None:
        threads = allocated_threads()

    command = thermompnn_command(path_to_pdb,
                                 mode=params['mode'],
                                 batch_size=params['batch_size'],
                                 chains=params['chains'],
                                 threshold=params['threshold'],
                                 distance=params['distance'],
                                 ss_penalty=params['ss_penalty'],
                                 threads=threads)
    run_command(command, 'Failure running ThermoMPNN-D', cwd=work_dir)

    path_to_results = os.path.join(work_dir, '{}.csv'.format(thermompnn_paths.thermompnn_out_prefix))
    if not os.path.isfile(path_to_results):
        raise ExternalCommandError('ThermoMPNN-D finished but wrote no {}'.format(path_to_results),
                                   command=command, returncode=0)
    return path_to_results
