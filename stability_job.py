import json
import logging
import os
import shutil
import tempfile

from get_structure import get_structure
from pdb_residues import count_residues_by_chain
from resource_estimates import Mode, estimate
from run_thermompnn import run_thermompnn
from save_results import save_results
from stability_errors import FileAccessError, InvalidInputError

# this file defines the stability_job class.
# a job is one structure and one set of ThermoMPNN-D parameters.
# the app calls preflight first, to know what resources to ask for,
# and then run on the node it got.

logger = logging.getLogger(__name__)

default_params = {
    'pdb_id': '',
    'pdb': '',
    'mode': Mode.SINGLE.value,
    'batch_size': 256,
    'chains': '',
    'threshold': -0.5,
    'distance': 5.0,
    'ss_penalty': False,
    'output_path': '',
    'output_file': '',
}


def _as_bool(name, value):
    # the app service sends 0/1, people on the command line write true/false
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)) and value in (0, 1):
        return bool(value)
    if isinstance(value, str) and value.strip().lower() in ('', '0', '1', 'true', 'false', 'yes', 'no'):
        return value.strip().lower() in ('1', 'true', 'yes')
    raise InvalidInputError('{} must be a boolean, got {!r}'.format(name, value))


def _as_number(name, value, kind):
    if isinstance(value, bool):
        raise InvalidInputError('{} must be a number, got {!r}'.format(name, value))
    try:
        number = kind(value)
    except (TypeError, ValueError):
        raise InvalidInputError('{} must be a number, got {!r}'.format(name, value)) from None
    return number


def check_params(raw_params):
    '''fills in the defaults and checks the types of the job parameters.
    Returns a new dictionary, raises InvalidInputError on bad parameters'''
    if not isinstance(raw_params, dict):
        raise InvalidInputError('job parameters must be a JSON object')

    params = dict(default_params)
    params.update(raw_params)
    for key in ('pdb_id', 'pdb', 'mode', 'chains', 'output_path', 'output_file'):
        # null from JSON means not given
        if params[key] is None:
            params[key] = ''
        params[key] = str(params[key]).strip()

    params['batch_size'] = _as_number('batch_size', params['batch_size'], int)
    if params['batch_size'] < 1:
        raise InvalidInputError('batch_size must be at least 1, got {}'.format(params['batch_size']))
    params['threshold'] = _as_number('threshold', params['threshold'], float)
    params['distance'] = _as_number('distance', params['distance'], float)
    params['ss_penalty'] = _as_bool('ss_penalty', params['ss_penalty'])

    # the input source is checked here too, before we touch any files
    if not params['pdb_id'] and not params['pdb']:
        raise InvalidInputError('PDB ID or PDB File must be provided')
    if params['pdb_id'] and params['pdb']:
        raise InvalidInputError('PDB ID and PDB File both provided, must provide one or the other')
    return params


def load_params(path_to_params):
    '''reads the job parameters from a JSON file'''
    try:
        with open(path_to_params, 'r') as params_file:
            raw_params = json.load(params_file)
    except OSError as error:
        raise FileAccessError('Cannot open {}: {}'.format(path_to_params, error.strerror)) from error
    except ValueError as error:
        raise InvalidInputError('{} is not valid JSON: {}'.format(path_to_params, error)) from error
    return check_params(raw_params)


class stability_job:

    def __init__(self, params, tmp_dir=None):
        self.params = check_params(params)

        # the app service may hand us a temp directory, otherwise make our own.
        # either way it is ours to remove when the job is done.
        if tmp_dir is None:
            tmp_dir = self.params.get('_tmpdir')
        if tmp_dir:
            os.makedirs(tmp_dir, exist_ok=True)
            self.tmp_dir = tmp_dir
        else:
            self.tmp_dir = tempfile.mkdtemp(prefix='stability_prediction.')
        self.path = None

    def get_pdb(self):
        '''gets the structure into the temp directory, and stores the path as self.path'''
        self.path = get_structure(self.params['pdb_id'], self.params['pdb'], self.tmp_dir)
        logger.info('structure is at %s', self.path)
        return self.path

    def preflight(self):
        '''Returns the resources to ask the scheduler for, as a dictionary with
        cpu, memory and runtime. Based on the number of residues in the structure'''
        try:
            return self._estimate_resources()
        finally:
            self.clean_up()

    def _estimate_resources(self):
        if self.path is None:
            self.get_pdb()

        residues_per_chain = count_residues_by_chain(self.path)
        for chain_id, number_of_residues in residues_per_chain.items():
            logger.info('chain %r: %d residues', chain_id, number_of_residues)
        res = sum(residues_per_chain.values())
        if res == 0:
            logger.warning('no standard residues found in %s', self.path)

        resources = estimate(self.params['mode'], res)
        logger.info('%d residues in %s mode: %s', res, self.params['mode'], resources.as_dict())
        return resources.as_dict()

    def run(self):
        '''runs ThermoMPNN-D and saves the csv to the workspace.
        The temp directory is removed afterwards, also when something failed.
        Returns the workspace path of the saved results'''
        try:
            if not self.params['output_path'] or not self.params['output_file']:
                raise InvalidInputError('output_path and output_file must be provided to save results')
            if self.path is None:
                self.get_pdb()
            path_to_results = run_thermompnn(self.path, self.params, self.tmp_dir)
            return save_results(path_to_results, self.params['output_path'], self.params['output_file'])
        finally:
            self.clean_up()

    def clean_up(self):
        if os.path.isdir(self.tmp_dir):
            shutil.rmtree(self.tmp_dir)
        self.path = None
