# the errors the stability prediction app can die with.
# none of them are retried, a job that raises one of these is finished.


class StabilityPredictionError(Exception):
    '''Base class for every fatal error in the app'''


class FileAccessError(StabilityPredictionError):
    '''The structure file could not be opened for reading'''


class InvalidInputError(StabilityPredictionError):
    '''The job parameters are missing, malformed or contradict each other'''


class ExternalCommandError(StabilityPredictionError):
    '''An external tool (download, workspace copy, ThermoMPNN-D) failed.
    The command line is kept, so the failure can be reproduced by hand'''

    def __init__(self, message, command=None, returncode=None):
        self.command = command
        self.returncode = returncode
        if command is not None:
            message = '{}: {}'.format(message, format_command(command))
        super().__init__(message)


def format_command(command):
    # commands are kept as lists for subprocess, but we want them readable in the log
    if isinstance(command, str):
        return command
    return ' '.join(str(part) for part in command)
