import json

import get_structure
from conftest import FakeResponse, pdb_line
from predict_stability import main


def test_estimate_local_file(write_pdb, capsys):
    path = write_pdb([pdb_line(res_seq=i) for i in range(1, 51)])
    assert main(['estimate', path, '--mode', 'additive']) == 0
    output = json.loads(capsys.readouterr().out)
    assert output == {'residues': 50, 'cpu': 1,
                      'memory': '{}G'.format(int(137745 * 50 * 1.2)),
                      'runtime': int(3.9802 * 50 * 1.2)}


def test_estimate_default_mode(two_residue_pdb, capsys):
    assert main(['estimate', two_residue_pdb]) == 0
    output = json.loads(capsys.readouterr().out)
    assert output['runtime'] == 600


def test_missing_pdb_fails(tmp_path):
    assert main(['estimate', str(tmp_path / 'missing.pdb')]) == 1


def test_preflight_to_file(tmp_path, monkeypatch):
    monkeypatch.setattr(get_structure.requests, 'get',
                        lambda url, **kwargs: FakeResponse(pdb_line(res_seq=1)))
    params = tmp_path / 'params.json'
    params.write_text(json.dumps({'pdb_id': '1UBQ', 'mode': 'epistatic', '_tmpdir': str(tmp_path / 'job')}))
    output = tmp_path / 'preflight.json'
    assert main(['preflight', str(params), '-o', str(output)]) == 0
    assert json.loads(output.read_text()) == {'cpu': 8, 'memory': '0G', 'runtime': int((0.0248 - 10.294 + 4956.8) * 1.2)}


def test_bad_params_fail(tmp_path):
    params = tmp_path / 'params.json'
    params.write_text(json.dumps({'pdb_id': '1UBQ', 'pdb': '/user/home/my.pdb'}))
    assert main(['run', str(params)]) == 1


def test_preflight_output_not_writable(tmp_path, monkeypatch):
    monkeypatch.setattr(get_structure.requests, 'get',
                        lambda url, **kwargs: FakeResponse(pdb_line(res_seq=1)))
    params = tmp_path / 'params.json'
    params.write_text(json.dumps({'pdb_id': '1UBQ', '_tmpdir': str(tmp_path / 'job')}))
    output = tmp_path / 'no_such_folder' / 'preflight.json'
    assert main(['preflight', str(params), '-o', str(output)]) == 1
