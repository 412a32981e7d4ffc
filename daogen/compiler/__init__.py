"""Compiler of daogen: turns mapper interfaces into implementation modules."""

from daogen.compiler.caching_strategy import CachingMode, select_caching_mode
from daogen.compiler.dao_factory_method import DaoFactoryMethodGenerator
from daogen.compiler.diagnostics import Diagnostic, DiagnosticReport, DiagnosticSink
from daogen.compiler.mapper_generator import MapperImplementationGenerator, generate_mapper_source
from daogen.compiler.scanner import MapperDeclaration, scan_mapper
from daogen.compiler.signature import MethodSignature, Parameter, TypeRef

__all__ = [
    "CachingMode",
    "DaoFactoryMethodGenerator",
    "Diagnostic",
    "DiagnosticReport",
    "DiagnosticSink",
    "MapperDeclaration",
    "MapperImplementationGenerator",
    "MethodSignature",
    "Parameter",
    "TypeRef",
    "generate_mapper_source",
    "scan_mapper",
    "select_caching_mode",
]
