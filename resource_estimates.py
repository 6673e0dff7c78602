import logging
import sys
from dataclasses import dataclass
from enum import Enum

from stability_errors import InvalidInputError

# the resource requirements for a ThermoMPNN-D run, based on the number of residues.
# the formulas are fitted to timed test runs, with a 20% buffer on top for better fitment.

logger = logging.getLogger(__name__)

SAFETY_MARGIN = 1.2


class Mode(Enum):
    '''The ThermoMPNN-D modes. SINGLE is also the fallback, so any mode
    string we do not recognise is estimated as a single mutant run.
    That means a typo like "epistatc" gets single mode resources.'''
    SINGLE = 'single'
    ADDITIVE = 'additive'
    EPISTATIC = 'epistatic'

    @classmethod
    def from_string(cls, mode):
        if isinstance(mode, cls):
            return mode
        try:
            return cls(mode)
        except ValueError:
            logger.warning('unknown mode %r, using the %s estimates', mode, cls.SINGLE.value)
            return cls.SINGLE


@dataclass(frozen=True)
class ResourceEstimate:
    '''cpus, memory in gigabytes and runtime in seconds for one job'''
    cpu: int
    memory_gb: int
    runtime: int

    @property
    def memory(self):
        # the scheduler wants the unit as a suffix
        return '{}G'.format(self.memory_gb)

    def as_dict(self):
        return {'cpu': self.cpu, 'memory': self.memory, 'runtime': self.runtime}


def estimate(mode, residue_count):
    '''Returns the ResourceEstimate for running ThermoMPNN-D in mode on a structure
    with residue_count standard residues'''
    if residue_count < 0:
        raise InvalidInputError('residue count must not be negative, got {}'.format(residue_count))
    res = residue_count

    mode = Mode.from_string(mode)
    if mode is Mode.EPISTATIC:
        # epistatic runs take a LOT longer than single or additive,
        # both runtime and memory grow faster than linear
        runtime = int((0.0248 * res ** 2 - 10.294 * res + 4956.8) * SAFETY_MARGIN)
        # the margin goes on twice here, once before and once after converting to gigabytes.
        # that is how the model was fitted, keep it.
        memory = int((152020 * res) * SAFETY_MARGIN / 1000000 * SAFETY_MARGIN)
        # 8 cpus is optimal based on rough testing
        return ResourceEstimate(cpu=8, memory_gb=memory, runtime=runtime)
    elif mode is Mode.ADDITIVE:
        runtime = int((3.9802 * res) * SAFETY_MARGIN)
        memory = int((137745 * res) * SAFETY_MARGIN)
        return ResourceEstimate(cpu=1, memory_gb=memory, runtime=runtime)
    else:
        # runtime is typically less than a minute, give it a buffer
        # that is still reasonably small
        memory = int((639.77 * res + 567236) * SAFETY_MARGIN)
        return ResourceEstimate(cpu=1, memory_gb=memory, runtime=600)


if __name__ == '__main__':
    print(estimate(sys.argv[1], int(sys.argv[2])).as_dict())
