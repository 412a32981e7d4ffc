"""Tests for daogen.compiler.dao_factory_method."""

import ast

import pytest

from daogen.compiler.caching_strategy import CachingMode
from daogen.compiler.dao_factory_method import DaoFactoryMethodGenerator
from daogen.compiler.diagnostics import DiagnosticReport
from daogen.compiler.field_allocator import NameIndex
from daogen.compiler.signature import TEXT_TYPE, MethodSignature, Parameter, TypeRef
from daogen.kernel.config.models import GeneratorConfig
from daogen.kernel.exceptions import (
    DuplicateRoleParameterError,
    ReservedParameterNameError,
    UnrecognizedParameterError,
)
from daogen.kernel.markers import ParameterRole

PRODUCT_DAO = TypeRef(module="shop.daos", qualname="ProductDao")
PRODUCT_DAO_IMPL = TypeRef(module="shop.daos", qualname="ProductDaoImpl")
KEYSPACE = Parameter(name="keyspace", annotation=TEXT_TYPE, role=ParameterRole.KEYSPACE)
TABLE = Parameter(name="table", annotation=TEXT_TYPE, role=ParameterRole.TABLE)


class RecordingAllocator:
    """Field allocator that records every allocation."""

    def __init__(self) -> None:
        self.names = NameIndex()
        self.simple_fields: list[tuple] = []
        self.map_fields: list[tuple] = []

    def add_dao_simple_field(self, suggested_name, value_type, dao_implementation, is_async):
        name = self.names.unique_field(suggested_name)
        self.simple_fields.append((name, value_type, dao_implementation, is_async))
        return name

    def add_dao_map_field(self, suggested_name, value_type):
        name = self.names.unique_field(suggested_name)
        self.map_fields.append((name, value_type))
        return name


def make_signature(*parameters: Parameter, is_async: bool = False) -> MethodSignature:
    return MethodSignature(
        mapper_name="InventoryMapper",
        name="product_dao",
        parameters=parameters,
        return_type=PRODUCT_DAO,
        is_async=is_async,
    )


def generate(signature: MethodSignature, allocator: RecordingAllocator | None = None) -> str:
    allocator = allocator or RecordingAllocator()
    generator = DaoFactoryMethodGenerator(
        signature, PRODUCT_DAO_IMPL, allocator, DiagnosticReport()
    )
    return ast.unparse(ast.fix_missing_locations(generator.generate()))


class TestSimpleMode:
    def test_allocates_simple_field_and_returns_it(self) -> None:
        allocator = RecordingAllocator()
        rendered = generate(make_signature(), allocator)

        assert rendered == "def product_dao(self) -> ProductDao:\n    return self.product_dao_cache"
        assert allocator.simple_fields == [
            ("product_dao_cache", PRODUCT_DAO, PRODUCT_DAO_IMPL, False)
        ]
        assert allocator.map_fields == []

    def test_renamed_field_is_warned(self) -> None:
        allocator = RecordingAllocator()
        allocator.names.unique_field("product_dao_cache")
        report = DiagnosticReport()
        generator = DaoFactoryMethodGenerator(make_signature(), PRODUCT_DAO_IMPL, allocator, report)

        assert generator.generate().body[0].value.attr == "product_dao_cache_2"
        (warning,) = report.warnings
        assert warning.location == "InventoryMapper.product_dao"

    def test_no_warning_without_rename(self) -> None:
        report = DiagnosticReport()
        DaoFactoryMethodGenerator(
            make_signature(), PRODUCT_DAO_IMPL, RecordingAllocator(), report
        ).generate()
        assert report.diagnostics == []

    def test_mode(self) -> None:
        generator = DaoFactoryMethodGenerator(
            make_signature(), PRODUCT_DAO_IMPL, RecordingAllocator(), DiagnosticReport()
        )
        assert generator.mode is CachingMode.SIMPLE
        assert not generator.is_cached_by_keyspace_and_table

    def test_async_simple_field(self) -> None:
        allocator = RecordingAllocator()
        rendered = generate(make_signature(is_async=True), allocator)

        assert rendered.startswith("def product_dao(self) -> Awaitable[ProductDao]:")
        assert allocator.simple_fields[0][3] is True


class TestKeyedMode:
    def test_keyspace_override(self) -> None:
        allocator = RecordingAllocator()
        rendered = generate(make_signature(KEYSPACE), allocator)

        assert rendered.splitlines()[:2] == [
            "def product_dao(self, keyspace: str) -> ProductDao:",
            "    key = DaoCacheKey(keyspace, None)",
        ]
        assert "ProductDaoImpl.init(self.context" in rendered
        assert allocator.map_fields == [("product_dao_cache", PRODUCT_DAO)]
        assert allocator.simple_fields == []

    def test_table_override(self) -> None:
        rendered = generate(make_signature(TABLE))
        assert "    key = DaoCacheKey(None, table)" in rendered.splitlines()

    def test_both_overrides(self) -> None:
        rendered = generate(make_signature(KEYSPACE, TABLE))
        assert rendered.splitlines()[0] == (
            "def product_dao(self, keyspace: str, table: str) -> ProductDao:"
        )
        assert "    key = DaoCacheKey(keyspace, table)" in rendered.splitlines()

    def test_default_is_repeated_in_signature(self) -> None:
        defaulted = KEYSPACE.model_copy(update={"has_default": True, "default": "shop"})
        rendered = generate(make_signature(defaulted))
        assert rendered.splitlines()[0] == (
            "def product_dao(self, keyspace: str='shop') -> ProductDao:"
        )

    def test_none_default_is_repeated(self) -> None:
        defaulted = TABLE.model_copy(update={"has_default": True})
        rendered = generate(make_signature(KEYSPACE, defaulted))
        assert rendered.splitlines()[0] == (
            "def product_dao(self, keyspace: str, table: str=None) -> ProductDao:"
        )

    def test_async_uses_async_construction(self) -> None:
        rendered = generate(make_signature(KEYSPACE, is_async=True))
        assert "compute_if_absent_async(key, lambda k: ProductDaoImpl.init_async(" in rendered

    def test_custom_field_suffix(self) -> None:
        allocator = RecordingAllocator()
        generator = DaoFactoryMethodGenerator(
            make_signature(KEYSPACE),
            PRODUCT_DAO_IMPL,
            allocator,
            DiagnosticReport(),
            GeneratorConfig(field_suffix="_daos"),
        )
        generator.generate()
        assert allocator.map_fields[0][0] == "product_dao_daos"


class TestInvalidSignatures:
    def test_validation_happens_before_allocation(self) -> None:
        allocator = RecordingAllocator()
        report = DiagnosticReport()
        with pytest.raises(DuplicateRoleParameterError):
            DaoFactoryMethodGenerator(
                make_signature(KEYSPACE, KEYSPACE.model_copy(update={"name": "other"})),
                PRODUCT_DAO_IMPL,
                allocator,
                report,
            )
        assert allocator.simple_fields == []
        assert allocator.map_fields == []
        assert len(report.errors) == 1

    def test_unrecognized_parameter(self) -> None:
        plain = Parameter(name="name", annotation=TEXT_TYPE)
        with pytest.raises(UnrecognizedParameterError):
            DaoFactoryMethodGenerator(
                make_signature(plain), PRODUCT_DAO_IMPL, RecordingAllocator(), DiagnosticReport()
            )

    @pytest.mark.parametrize("reserved", ["DaoCacheKey", "ProductDaoImpl"])
    def test_parameter_hiding_body_name(self, reserved) -> None:
        allocator = RecordingAllocator()
        report = DiagnosticReport()
        with pytest.raises(ReservedParameterNameError):
            DaoFactoryMethodGenerator(
                make_signature(KEYSPACE.model_copy(update={"name": reserved}), TABLE),
                PRODUCT_DAO_IMPL,
                allocator,
                report,
            )
        assert allocator.map_fields == []
        (error,) = report.errors
        assert error.location == f"InventoryMapper.product_dao({reserved})"
        assert f"'{reserved}' hides a name" in error.message

    def test_key_variable_name_is_not_reserved(self) -> None:
        rendered = generate(make_signature(KEYSPACE.model_copy(update={"name": "key"})))
        assert "    key_ = DaoCacheKey(key, None)" in rendered.splitlines()


class TestIdempotence:
    @pytest.mark.parametrize(
        "parameters", [(), (KEYSPACE,), (TABLE,), (KEYSPACE, TABLE)]
    )
    def test_same_signature_same_body(self, parameters) -> None:
        signature = make_signature(*parameters)
        assert generate(signature) == generate(signature)
