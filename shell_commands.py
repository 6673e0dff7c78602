import logging
import subprocess

from stability_errors import ExternalCommandError, format_command

logger = logging.getLogger(__name__)


def run_command(command, failure_message, cwd=None):
    '''runs an external tool and waits for it to finish.
    command is a list, so nothing goes through the shell.
    Raises ExternalCommandError with the full command line if the tool
    can not be started or exits non-zero'''
    logger.info('calling: %s', format_command(command))
    try:
        completed = subprocess.run(command, cwd=cwd)
    except OSError as error:
        # usually the executable is not on the PATH
        raise ExternalCommandError('{} ({})'.format(failure_message, error), command=command) from error

    if completed.returncode != 0:
        raise ExternalCommandError('{} (exit code {})'.format(failure_message, completed.returncode),
                                   command=command, returncode=completed.returncode)
    return completed
