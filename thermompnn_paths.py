import os

# here are the paths and commands for ThermoMPNN-D and the workspace tools
# remember to update if the container layout moves.
# each one can be overridden from the environment, so the same code runs
# inside and outside the app container.

# the ThermoMPNN-D executable, expected on the PATH inside the container
path_to_thermompnn = os.environ.get('THERMOMPNN_BIN', 'ThermoMPNN-D')
# the workspace copy tool, used both for fetching inputs and saving results
path_to_p3_cp = os.environ.get('P3_CP_BIN', 'p3-cp')

# pdb files are downloaded from the rcsb, {} is the pdb id
rcsb_download_url = os.environ.get('RCSB_DOWNLOAD_URL', 'https://files.rcsb.org/download/{}.pdb')
# seconds to wait on the rcsb before giving up
rcsb_timeout = 60

# ThermoMPNN-D writes <out_prefix>.csv into its working directory
thermompnn_out_prefix = 'thermompnnd'

# the scheduler tells us how many cpus we got here.
# if it is not set, we run single threaded
allocated_cpu_variable = 'P3_ALLOCATED_CPU'
