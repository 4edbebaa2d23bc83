import logging

from hypothesis import settings, HealthCheck
from pytest import fixture
from csmult import CRS, CCS
from csmult.kernels import use_kernel, get_kernel

# turn off Numba logging
logging.getLogger('numba').setLevel(logging.INFO)

KERNELS = ["numba", "scipy"]


# set up fixtures
@fixture(scope="module", params=KERNELS)
def kernel(request):
    """
    Fixture for variable multiplication kernels.  This fixture is parameterized,
    so if you write a test function with a parameter ``kernel`` as its first
    parameter, it will be called once for each kernel under active test.
    """
    with use_kernel(request.param):
        k = get_kernel()
        # warm-up the kernel
        k.mult_crs_ccs(CRS.empty(1, 1), CCS.empty(1, 1))
        yield k


# set up profiles
settings.register_profile('default', deadline=5000)
settings.register_profile('large', settings.get_profile('default'),
                          max_examples=5000, deadline=None)
settings.register_profile('fast', max_examples=50)
settings.register_profile('nojit', settings.get_profile('fast'),
                          deadline=None, suppress_health_check=list(HealthCheck))
settings.load_profile('default')
