import pytest

from devicequery.configs.architectures import Architecture, ArchitectureTable
from devicequery.constants.report import COMPUTE_MODE_DESCRIPTIONS, UNKNOWN_COMPUTE_MODE
from devicequery.device.driver import UNSUPPORTED
from devicequery.device.resolver import RESOLVED_ATTRIBUTES, resolve, resolve_all
from devicequery.device.session import DriverSession
from devicequery.device.types import ComputeCapability, DriverVersion, PciLocation
from devicequery.enums.attributes import DeviceAttribute as A
from devicequery.enums.compute_mode import ComputeMode
from devicequery.errors import QueryFailedError
from devicequery.report.formatter import format_memory


def _resolve_first(driver, table=None):
    with DriverSession.open(driver) as session:
        return resolve(session, 0, session.get_device(0), table)


class TestResolveL40S:
    def test_identity(self, l40s_report):
        assert l40s_report.index == 0
        assert l40s_report.name == "NVIDIA L40S"
        assert l40s_report.driver_version == DriverVersion(12, 4)
        assert l40s_report.compute_capability == ComputeCapability(8, 9)

    def test_derived_core_count(self, l40s_report):
        assert l40s_report.multiprocessor_count == 142
        assert l40s_report.cores_per_multiprocessor == 128
        assert l40s_report.total_cores == 18176

    def test_memory(self, l40s_report):
        assert l40s_report.total_global_memory == 47576711168
        assert format_memory(l40s_report.total_global_memory).startswith("45373 MBytes")

    def test_grouped_limits(self, l40s_report):
        assert l40s_report.max_texture_1d == (131072,)
        assert l40s_report.max_texture_2d == (131072, 65536)
        assert l40s_report.max_texture_3d == (16384, 16384, 16384)
        assert l40s_report.max_texture_1d_layered == (32768, 2048)
        assert l40s_report.max_texture_2d_layered == (32768, 32768, 2048)
        assert l40s_report.max_block_dim == (1024, 1024, 64)
        assert l40s_report.max_grid_dim == (2147483647, 65535, 65535)
        assert l40s_report.pci_location == PciLocation(0, 1, 0)

    def test_flags(self, l40s_report):
        assert l40s_report.concurrent_copy_and_kernel is True
        assert l40s_report.kernel_exec_timeout is False
        assert l40s_report.surface_alignment is True
        assert l40s_report.ecc_enabled is True
        assert l40s_report.cooperative_multi_device_launch is False

    def test_tcc_unsupported_on_linux(self, l40s_report):
        assert l40s_report.tcc_driver is UNSUPPORTED

    def test_is_consistent(self, l40s_report):
        assert l40s_report.inconsistencies == ()


def test_queries_issued_in_fixed_order(fake_driver):
    _resolve_first(fake_driver)
    assert [attribute for _, attribute in fake_driver.queries] == list(RESOLVED_ATTRIBUTES)


def test_resolved_attributes_are_unique():
    assert len(set(RESOLVED_ATTRIBUTES)) == len(RESOLVED_ATTRIBUTES)


def test_unsupported_attributes_do_not_abort(fake_driver, l40s_device):
    del l40s_device.attributes[A.L2_CACHE_SIZE]
    del l40s_device.attributes[A.ECC_ENABLED]
    del l40s_device.attributes[A.MAXIMUM_TEXTURE3D_DEPTH]
    report = _resolve_first(fake_driver)
    assert report.l2_cache_size is UNSUPPORTED
    assert report.ecc_enabled is UNSUPPORTED
    assert report.max_texture_3d == (16384, 16384, UNSUPPORTED)
    assert report.inconsistencies == ()


def test_query_failure_aborts_report(fake_driver, l40s_device):
    l40s_device.failing = frozenset({A.WARP_SIZE})
    with pytest.raises(QueryFailedError) as excinfo:
        _resolve_first(fake_driver)
    assert excinfo.value.attribute is A.WARP_SIZE
    assert "WARP_SIZE" in str(excinfo.value)
    assert fake_driver.shutdown_calls == 1


def test_unknown_capability_resolves_without_cores(fake_driver, l40s_device):
    l40s_device.attributes[A.COMPUTE_CAPABILITY_MAJOR] = 99
    report = _resolve_first(fake_driver)
    assert report.compute_capability == ComputeCapability(99, 9)
    assert report.cores_per_multiprocessor is None
    assert report.total_cores is None
    assert report.inconsistencies == ()


def test_missing_capability_is_inconsistent(fake_driver, l40s_device):
    del l40s_device.attributes[A.COMPUTE_CAPABILITY_MINOR]
    report = _resolve_first(fake_driver)
    assert report.compute_capability is None
    assert report.total_cores is None
    assert "compute capability not reported" in report.inconsistencies


def test_zero_multiprocessors_is_inconsistent(fake_driver, l40s_device):
    l40s_device.attributes[A.MULTIPROCESSOR_COUNT] = 0
    report = _resolve_first(fake_driver)
    assert "multiprocessor count not reported" in report.inconsistencies


def test_custom_table_is_used(fake_driver):
    table = ArchitectureTable(architectures=(Architecture("Test", 8, 9, 7),))
    report = _resolve_first(fake_driver, table)
    assert report.cores_per_multiprocessor == 7
    assert report.total_cores == 142 * 7


@pytest.mark.parametrize("mode", list(ComputeMode))
def test_compute_mode_descriptions(fake_driver, l40s_device, mode):
    l40s_device.attributes[A.COMPUTE_MODE] = int(mode)
    report = _resolve_first(fake_driver)
    assert report.compute_mode_description == COMPUTE_MODE_DESCRIPTIONS[mode]


@pytest.mark.parametrize("value", [4, 42, None])
def test_unknown_compute_mode(fake_driver, l40s_device, value):
    if value is None:
        del l40s_device.attributes[A.COMPUTE_MODE]
    else:
        l40s_device.attributes[A.COMPUTE_MODE] = value
    report = _resolve_first(fake_driver)
    assert report.compute_mode_description == UNKNOWN_COMPUTE_MODE


def test_resolve_all_preserves_device_order(fake_driver, l40s_device):
    from tests.fixtures.driver_fixtures import FakeDevice

    fake_driver.devices.append(FakeDevice(name="NVIDIA A100"))
    with DriverSession.open(fake_driver) as session:
        reports = resolve_all(session)
    assert [r.index for r in reports] == [0, 1]
    assert [r.name for r in reports] == ["NVIDIA L40S", "NVIDIA A100"]


def test_report_is_immutable(l40s_report):
    with pytest.raises(AttributeError):
        l40s_report.name = "other"
