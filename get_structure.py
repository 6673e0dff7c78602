import logging
import os
import re
import sys

import requests

import thermompnn_paths
from shell_commands import run_command
from stability_errors import ExternalCommandError, InvalidInputError

# this file gets the input structure for a job into a local folder.
# either it is downloaded from the rcsb, or copied from the workspace.

logger = logging.getLogger(__name__)

# pdb ids are alphanumeric, we use them as file names so don't allow anything else
pdb_id_pattern = re.compile(r'^[A-Za-z0-9]+$')


def download_pdb(pdb_id, out_dir):
    '''This function downloads the pdb file for pdb_id from the rcsb,
    and saves it as out_dir/<pdb_id>.pdb. It returns the path to the file'''

    if not pdb_id_pattern.match(pdb_id):
        raise InvalidInputError('not a valid PDB ID: {!r}'.format(pdb_id))

    requestURL = thermompnn_paths.rcsb_download_url.format(pdb_id)
    logger.info('downloading %s', requestURL)
    try:
        r = requests.get(requestURL, timeout=thermompnn_paths.rcsb_timeout)
    except requests.RequestException as error:
        raise ExternalCommandError('Failure downloading PDB file ({})'.format(error),
                                   command=['GET', requestURL]) from error
    # we check that this is an entry at the rcsb
    if not r.ok:
        raise ExternalCommandError('Failure downloading PDB file (HTTP {})'.format(r.status_code),
                                   command=['GET', requestURL])

    path_to_pdbfile = os.path.join(out_dir, '{}.pdb'.format(pdb_id))
    with open(path_to_pdbfile, 'w') as pdb_file:
        pdb_file.write(r.text)
    return path_to_pdbfile


def copy_from_workspace(workspace_path, out_dir):
    '''This function copies a pdb file from the workspace into out_dir,
    keeping the file name. It returns the local path'''
    path_to_pdbfile = os.path.join(out_dir, os.path.basename(workspace_path.rstrip('/')))
    command = [thermompnn_paths.path_to_p3_cp, 'ws:' + workspace_path, path_to_pdbfile]
    run_command(command, 'Failure copying PDB file')
    return path_to_pdbfile


def get_structure(pdb_id, workspace_path, out_dir):
    '''gets the structure from whichever source was given.
    exactly one of pdb_id and workspace_path has to be non-empty'''
    if not pdb_id and not workspace_path:
        raise InvalidInputError('PDB ID or PDB File must be provided')
    # we compute on one or the other, batches are not supported
    if pdb_id and workspace_path:
        raise InvalidInputError('PDB ID and PDB File both provided, must provide one or the other')

    if pdb_id:
        return download_pdb(pdb_id, out_dir)
    return copy_from_workspace(workspace_path, out_dir)


if __name__ == '__main__':
    print(download_pdb(sys.argv[1], '.'))
