import logging
import sys

from stability_errors import FileAccessError

# this file counts the residues in a pdb file.
# the count is what the resource estimates are based on, so it should
# only count what ThermoMPNN-D will actually look at: standard amino acids,
# one conformer, once per residue.

logger = logging.getLogger(__name__)

# the twenty standard amino acids. ligands, waters, modified residues
# and everything else in the pdb is not counted.
standard_residues = frozenset([
    'ALA', 'ARG', 'ASN', 'ASP', 'CYS', 'GLN', 'GLU', 'GLY', 'HIS', 'ILE',
    'LEU', 'LYS', 'MET', 'PHE', 'PRO', 'SER', 'THR', 'TRP', 'TYR', 'VAL',
])

# fixed columns of an ATOM record, as python slices (0-based, end exclusive).
# in the pdb format documentation these are columns 1-4, 17, 18-20, 22, 23-26 and 27
RECORD_TYPE = slice(0, 4)
ALT_LOCATION = 16
RESIDUE_NAME = slice(17, 20)
CHAIN_ID = 21
RESIDUE_SEQUENCE_NUMBER = slice(22, 26)
INSERTION_CODE = 26
# a line has to reach the insertion code column, shorter lines are skipped
MIN_LINE_LENGTH = 27

ATOM_RECORD = 'ATOM'
# blank or A is the primary conformer
PRIMARY_ALT_LOCATIONS = (' ', 'A')


def read_residue_keys(path_to_pdb):
    '''this generator reads a pdb file line by line, and yields the
    (chain_id, residue_number, insertion_code) key of every standard residue
    the first time its primary conformer is seen.
    Raises FileAccessError if the file can not be opened'''

    try:
        # latin-1 maps every byte to one character, so the columns are byte columns
        # whatever the locale is, and no byte fails to decode.
        # newline='' keeps the line endings, a \r\n counts towards the line length
        pdb_file = open(path_to_pdb, 'r', encoding='latin-1', newline='')
    except OSError as error:
        raise FileAccessError('Cannot open {}: {}'.format(path_to_pdb, error.strerror)) from error

    seen_residues = set()
    with pdb_file:
        for line in pdb_file:
            # make sure the columns exist
            if len(line) < MIN_LINE_LENGTH:
                continue
            # only ATOM records, no HETATM, headers etc.
            if line[RECORD_TYPE] != ATOM_RECORD:
                continue

            residue_name = line[RESIDUE_NAME].strip()
            if residue_name not in standard_residues:
                continue

            key = (line[CHAIN_ID].strip(),
                   line[RESIDUE_SEQUENCE_NUMBER].strip(),
                   line[INSERTION_CODE].strip())

            # non-primary conformers are always skipped, also when no primary
            # line exists for the residue. a residue that is only present as
            # altloc B is not counted.
            if line[ALT_LOCATION] not in PRIMARY_ALT_LOCATIONS:
                continue

            if key in seen_residues:
                continue
            seen_residues.add(key)
            yield key


def count_residues(path_to_pdb):
    '''Returns the number of unique standard residues in the pdb file'''
    number_of_residues = 0
    for _ in read_residue_keys(path_to_pdb):
        number_of_residues = number_of_residues + 1
    logger.debug('%s has %d standard residues', path_to_pdb, number_of_residues)
    return number_of_residues


def count_residues_by_chain(path_to_pdb):
    '''Returns a dictionary with the chain ids as keys, and the number of
    standard residues in that chain as values. Chains are in file order'''
    residues_per_chain = {}
    for chain_id, _, _ in read_residue_keys(path_to_pdb):
        residues_per_chain[chain_id] = residues_per_chain.get(chain_id, 0) + 1
    return residues_per_chain


if __name__ == '__main__':
    print(count_residues(sys.argv[1]))
