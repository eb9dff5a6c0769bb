import functools
import inspect
import logging
import pathlib
import types
from typing import Annotated, Optional

import pytest

import wirebox.introspection as introspection_module
from tests.mocks import DepA, DepB, DepC
from wirebox._internal.policies import DeclaredTypePolicy
from wirebox.container import Container
from wirebox.exceptions import WireboxIntrospectionError
from wirebox.identifiers import class_identifier
from wirebox.introspection import ParameterDescriptor, TypeIntrospector, describe_callable


class TestParametersOf:
    def test_class_without_constructor_has_no_parameters(
        self,
        introspector: TypeIntrospector,
    ) -> None:
        assert introspector.parameters_of(DepA) == ()

    def test_class_parameters_in_declaration_order(self, introspector: TypeIntrospector) -> None:
        assert introspector.parameters_of(DepC) == (
            ParameterDescriptor(name="b", declared_type=DepB, is_optional=False),
            ParameterDescriptor(name="name", declared_type=None, is_optional=False),
            ParameterDescriptor(name="age", declared_type=None, is_optional=True, default=22),
        )

    def test_function_parameters(self, introspector: TypeIntrospector) -> None:
        def make(a: DepA, *, label: str = "x") -> None: ...

        assert introspector.parameters_of(make) == (
            ParameterDescriptor(name="a", declared_type=DepA, is_optional=False),
            ParameterDescriptor(
                name="label",
                declared_type=None,
                is_optional=True,
                default="x",
                keyword_only=True,
            ),
        )

    def test_untyped_parameter(self, introspector: TypeIntrospector) -> None:
        (parameter,) = introspector.parameters_of(lambda count: count)

        assert parameter == ParameterDescriptor(name="count", declared_type=None, is_optional=False)

    def test_variadic_parameters_are_skipped(self, introspector: TypeIntrospector) -> None:
        def make(a: DepA, *args: DepB, **kwargs: DepB) -> None: ...

        assert [p.name for p in introspector.parameters_of(make)] == ["a"]

    def test_optional_default_none_is_kept(self, introspector: TypeIntrospector) -> None:
        def make(a: Optional[DepA] = None) -> None: ...  # noqa: UP007

        (parameter,) = introspector.parameters_of(make)

        assert parameter.is_optional
        assert parameter.default is None
        assert parameter.declared_type is None

    def test_union_and_generic_annotations_have_no_declared_type(
        self,
        introspector: TypeIntrospector,
    ) -> None:
        def make(a: DepA | DepB, b: list[DepA]) -> None: ...

        assert [p.declared_type for p in introspector.parameters_of(make)] == [None, None]

    def test_annotated_is_unwrapped(self, introspector: TypeIntrospector) -> None:
        def make(a: Annotated[DepA, "meta"]) -> None: ...

        (parameter,) = introspector.parameters_of(make)

        assert parameter.declared_type is DepA

    def test_primitive_annotations_have_no_declared_type(
        self,
        introspector: TypeIntrospector,
    ) -> None:
        def make(a: int, b: str, c: bool, d: bytes, e: dict) -> None: ...

        assert all(p.declared_type is None for p in introspector.parameters_of(make))

    def test_custom_ignored_types(self) -> None:
        introspector = TypeIntrospector(DeclaredTypePolicy.from_types([DepA]))

        def make(a: DepA, b: DepB) -> None: ...

        assert [p.declared_type for p in introspector.parameters_of(make)] == [None, DepB]

    def test_unresolvable_forward_reference_logs_warning(
        self,
        introspector: TypeIntrospector,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        def make(a: "UndefinedDependency") -> None: ...  # noqa: F821

        with caplog.at_level(logging.WARNING, logger="wirebox.introspection"):
            (parameter,) = introspector.parameters_of(make)

        assert parameter.declared_type is None
        assert "UndefinedDependency" in caplog.text

    def test_callable_instance(self, introspector: TypeIntrospector) -> None:
        class Builder:
            def __call__(self, a: DepA) -> DepA:
                return a

        (parameter,) = introspector.parameters_of(Builder())

        assert parameter.declared_type is DepA

    def test_signature_failure_raises(
        self,
        introspector: TypeIntrospector,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        def no_signature(_: object) -> inspect.Signature:
            msg = "no signature found"
            raise ValueError(msg)

        fake_inspect = types.SimpleNamespace(
            signature=no_signature,
            Parameter=inspect.Parameter,
            isfunction=inspect.isfunction,
            ismethod=inspect.ismethod,
        )
        monkeypatch.setattr(introspection_module, "inspect", fake_inspect)

        def make() -> None: ...

        with pytest.raises(WireboxIntrospectionError) as exc_info:
            introspector.parameters_of(make)

        assert exc_info.value.target is make
        assert isinstance(exc_info.value.cause, ValueError)


class TestLocate:
    def test_locates_importable_class(self, introspector: TypeIntrospector) -> None:
        assert introspector.locate(class_identifier(DepA)) is DepA

    def test_locates_remembered_local_class(self, introspector: TypeIntrospector) -> None:
        class Local:
            pass

        identifier = introspector.remember(Local)

        assert identifier == class_identifier(Local)
        assert introspector.locate(identifier) is Local

    def test_unknown_local_class_is_not_located(self, introspector: TypeIntrospector) -> None:
        class Local:
            pass

        assert introspector.locate(class_identifier(Local)) is None

    @pytest.mark.parametrize(
        "identifier",
        ["foo", "db.dsn", "wirebox.no_such_module.Thing", "os.path.join"],
    )
    def test_non_class_identifiers(self, introspector: TypeIntrospector, identifier: str) -> None:
        assert introspector.locate(identifier) is None

    def test_module_failing_on_import_is_not_located(
        self,
        introspector: TypeIntrospector,
        tmp_path: pathlib.Path,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        (tmp_path / "wirebox_broken_module.py").write_text(
            'raise RuntimeError("boom")\n\nclass Thing:\n    pass\n',
            encoding="utf-8",
        )
        monkeypatch.syspath_prepend(str(tmp_path))

        assert introspector.locate("wirebox_broken_module.Thing") is None
        assert not Container().has("wirebox_broken_module.Thing")

    def test_copy_is_independent(self, introspector: TypeIntrospector) -> None:
        class Local:
            pass

        clone = introspector.copy()
        clone.remember(Local)

        assert clone.locate(class_identifier(Local)) is Local
        assert introspector.locate(class_identifier(Local)) is None


class TestDescribeCallable:
    def test_class(self) -> None:
        assert describe_callable(DepA) == "__init__"

    def test_function(self) -> None:
        def make() -> None: ...

        assert describe_callable(make).endswith("test_function.<locals>.make")

    def test_partial(self) -> None:
        def make(a: int) -> int:
            return a

        assert describe_callable(functools.partial(make, 1)).endswith("make")
