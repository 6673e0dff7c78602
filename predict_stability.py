import argparse
import json
import logging
import sys

from pdb_residues import count_residues
from resource_estimates import Mode, estimate
from stability_errors import FileAccessError, StabilityPredictionError
from stability_job import load_params, stability_job

# this is the entry point of the stability prediction app.
# preflight:  fetch the structure, count residues and print the resources to ask for
# run:        fetch the structure, run ThermoMPNN-D and save the csv to the workspace
# estimate:   count residues in a local pdb file and print the resources, no fetching

logger = logging.getLogger('predict_stability')


def preflight(path_to_params, path_to_output=None):
    job = stability_job(load_params(path_to_params))
    resources = job.preflight()
    # the scheduler reads the preflight result as json
    if path_to_output:
        try:
            with open(path_to_output, 'w') as output_file:
                json.dump(resources, output_file, indent=2)
        except OSError as error:
            raise FileAccessError('Cannot write {}: {}'.format(path_to_output, error.strerror)) from error
    else:
        print(json.dumps(resources, indent=2))
    return resources


def run(path_to_params):
    job = stability_job(load_params(path_to_params))
    workspace_path = job.run()
    logger.info('results saved to %s', workspace_path)
    return workspace_path


def estimate_local(path_to_pdb, mode):
    res = count_residues(path_to_pdb)
    resources = estimate(mode, res)
    output = dict(residues=res, **resources.as_dict())
    print(json.dumps(output, indent=2))
    return output


def make_parser():
    parser = argparse.ArgumentParser(
        description='Predict protein stability changes with ThermoMPNN-D')
    parser.add_argument('-v', '--verbose', action='store_true', help='log debug messages')
    subparsers = parser.add_subparsers(dest='command')
    subparsers.required = True

    preflight_parser = subparsers.add_parser('preflight', help='estimate cpu, memory and runtime for a job')
    preflight_parser.add_argument('params', help='job parameters, as a JSON file')
    preflight_parser.add_argument('-o', '--output', help='write the estimate here instead of stdout')

    run_parser = subparsers.add_parser('run', help='run ThermoMPNN-D and save the results')
    run_parser.add_argument('params', help='job parameters, as a JSON file')

    estimate_parser = subparsers.add_parser('estimate', help='estimate resources for a local pdb file')
    estimate_parser.add_argument('pdb', help='path to a pdb file')
    estimate_parser.add_argument('--mode', default=Mode.SINGLE.value,
                                 help='single, additive or epistatic. anything else is treated as single')
    return parser


def main(argv=None):
    args = make_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format='%(asctime)s %(name)s %(levelname)s: %(message)s')
    try:
        if args.command == 'preflight':
            preflight(args.params, args.output)
        elif args.command == 'run':
            run(args.params)
        else:
            estimate_local(args.pdb, args.mode)
    except StabilityPredictionError as error:
        logger.error('%s', error)
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
