import subprocess

import pytest

import shell_commands
import thermompnn_paths


def pdb_line(record='ATOM', serial=1, atom_name='CA', alt_loc=' ', res_name='ALA',
             chain_id='A', res_seq=1, i_code=' ', x=0.0, y=0.0, z=0.0):
    # fixed column ATOM/HETATM record, see the pdb format documentation
    return '{:<6}{:>5} {:<4}{:1}{:>3} {:1}{:>4}{:1}   {:>8.3f}{:>8.3f}{:>8.3f}{:>6.2f}{:>6.2f}          {:>2}\n'.format(
        record, serial, atom_name, alt_loc, res_name, chain_id, res_seq, i_code, x, y, z, 1.0, 20.0, atom_name[0])


@pytest.fixture
def write_pdb(tmp_path):
    '''writes the given lines to a pdb file in tmp_path and returns the path'''
    def _write(lines, name='structure.pdb'):
        path = tmp_path / name
        path.write_text(''.join(lines))
        return str(path)
    return _write


@pytest.fixture
def two_residue_pdb(write_pdb):
    lines = ['HEADER    HYDROLASE                               01-JAN-00   1ABC              \n',
             pdb_line(serial=1, atom_name='N', res_name='MET', res_seq=1),
             pdb_line(serial=2, atom_name='CA', res_name='MET', res_seq=1),
             pdb_line(serial=3, atom_name='N', res_name='LYS', res_seq=2),
             pdb_line(serial=4, atom_name='CA', res_name='LYS', res_seq=2),
             pdb_line(record='HETATM', serial=5, atom_name='C1', res_name='NAG', res_seq=101),
             'END\n']
    return write_pdb(lines)


@pytest.fixture(autouse=True)
def default_paths(monkeypatch):
    # the paths can be overridden from the environment, tests use the defaults
    monkeypatch.setattr(thermompnn_paths, 'path_to_thermompnn', 'ThermoMPNN-D')
    monkeypatch.setattr(thermompnn_paths, 'path_to_p3_cp', 'p3-cp')
    monkeypatch.setattr(thermompnn_paths, 'rcsb_download_url', 'https://files.rcsb.org/download/{}.pdb')
    monkeypatch.delenv('P3_ALLOCATED_CPU', raising=False)


class FakeSubprocess:
    '''stands in for subprocess.run, records the commands and returns
    the given exit code. on_call can write the files a tool would write'''

    def __init__(self, returncode=0, on_call=None):
        self.returncode = returncode
        self.on_call = on_call
        self.calls = []

    def __call__(self, command, cwd=None, **kwargs):
        self.calls.append((list(command), cwd))
        if self.on_call is not None:
            self.on_call(command, cwd)
        return subprocess.CompletedProcess(command, self.returncode)


@pytest.fixture
def fake_subprocess(monkeypatch):
    def _install(returncode=0, on_call=None):
        fake = FakeSubprocess(returncode, on_call)
        monkeypatch.setattr(shell_commands.subprocess, 'run', fake)
        return fake
    return _install


class FakeResponse:
    def __init__(self, text='', status_code=200):
        self.text = text
        self.status_code = status_code

    @property
    def ok(self):
        return self.status_code < 400
