import os
import sys
sys.path.insert(0, os.path.abspath('..'))

import csmult
import csmult.kernels
# document with the Numba kernel regardless of the environment
csmult.kernels._initialize('numba')

project = 'csmult'
copyright = '2024 csmult contributors'
author = 'csmult contributors'

release = csmult.__version__

extensions = [
    'sphinx.ext.napoleon',
    'sphinx.ext.autodoc',
    'sphinx.ext.autosummary',
    'sphinx.ext.intersphinx',
]

source_suffix = '.rst'

pygments_style = 'sphinx'
highlight_language = 'python3'

html_theme = 'furo'
templates_path = ['_templates']

intersphinx_mapping = {
    'python': ('https://docs.python.org/3/', None),
    'numpy': ('https://numpy.org/doc/stable/', None),
    'scipy': ('https://docs.scipy.org/doc/scipy/', None),
    'numba': ('https://numba.readthedocs.io/en/stable/', None),
}

autodoc_default_options = {
    'member-order': 'bysource'
}
