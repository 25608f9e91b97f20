"""
Tree-sitter capture queries used for compression.

Capture names follow the tags-query convention: ``@name.definition.*`` for
declared names, ``@name.reference.*`` for call sites and modules,
``@definition.*`` / ``@reference.*`` for the enclosing construct, and
``@comment`` for comments and docstrings. The engine only keeps captures whose
name contains ``name``, ``comment``, ``import`` or ``require``.
"""

from .languages import Language

QUERY_PYTHON = """
(comment) @comment

(expression_statement
  (string) @comment) @docstring

(import_statement
  name: (dotted_name) @name.reference.module) @definition.import

(import_statement
  name: (aliased_import) @name.reference.module) @definition.import

(import_from_statement
  module_name: (_) @name.reference.module) @definition.import

(class_definition
  name: (identifier) @name.definition.class) @definition.class

(function_definition
  name: (identifier) @name.definition.function) @definition.function

(call
  function: [
      (identifier) @name.reference.call
      (attribute
        attribute: (identifier) @name.reference.call)
  ]) @reference.call

(assignment
  left: (identifier) @name.definition.type_alias) @definition.type_alias
"""

QUERY_JAVASCRIPT = """
(comment) @comment

(import_statement
  source: (string) @name.reference.module) @definition.import

(method_definition
  name: (property_identifier) @name.definition.method) @definition.method

(class
  name: (_) @name.definition.class) @definition.class

(class_declaration
  name: (_) @name.definition.class) @definition.class

(function_declaration
  name: (identifier) @name.definition.function) @definition.function

(generator_function_declaration
  name: (identifier) @name.definition.function) @definition.function

(lexical_declaration
  (variable_declarator
    name: (identifier) @name.definition.function
    value: [(arrow_function) (function_expression)])) @definition.function

(variable_declaration
  (variable_declarator
    name: (identifier) @name.definition.function
    value: [(arrow_function) (function_expression)])) @definition.function

(call_expression
  function: (identifier) @name.reference.call) @reference.call

(call_expression
  function: (member_expression
    property: (property_identifier) @name.reference.call)) @reference.call

(new_expression
  constructor: (_) @name.reference.class) @reference.class
"""

QUERY_TYPESCRIPT = """
(comment) @comment

(import_statement
  source: (string) @name.reference.module) @definition.import

(function_signature
  name: (identifier) @name.definition.function) @definition.function

(method_signature
  name: (_) @name.definition.method) @definition.method

(abstract_method_signature
  name: (_) @name.definition.method) @definition.method

(abstract_class_declaration
  name: (type_identifier) @name.definition.class) @definition.class

(class_declaration
  name: (type_identifier) @name.definition.class) @definition.class

(interface_declaration
  name: (type_identifier) @name.definition.interface) @definition.interface

(type_alias_declaration
  name: (type_identifier) @name.definition.type) @definition.type

(enum_declaration
  name: (identifier) @name.definition.enum) @definition.enum

(function_declaration
  name: (identifier) @name.definition.function) @definition.function

(method_definition
  name: (_) @name.definition.method) @definition.method

(lexical_declaration
  (variable_declarator
    name: (identifier) @name.definition.function
    value: [(arrow_function) (function_expression)])) @definition.function

(call_expression
  function: (identifier) @name.reference.call) @reference.call

(call_expression
  function: (member_expression
    property: (property_identifier) @name.reference.call)) @reference.call

(new_expression
  constructor: (identifier) @name.reference.class) @reference.class
"""

QUERY_GO = """
(comment) @comment

(package_clause
  (package_identifier) @name.reference.module) @definition.package

(import_declaration) @definition.import

(function_declaration
  name: (identifier) @name.definition.function) @definition.function

(method_declaration
  name: (field_identifier) @name.definition.method) @definition.method

(type_spec
  name: (type_identifier) @name.definition.type) @definition.type

(var_declaration
  (var_spec
    name: (identifier) @name.definition.variable)) @definition.variable

(const_declaration
  (const_spec
    name: (identifier) @name.definition.constant)) @definition.constant

(call_expression
  function: (identifier) @name.reference.call) @reference.call

(call_expression
  function: (selector_expression
    field: (field_identifier) @name.reference.call)) @reference.call
"""

QUERY_RUST = """
(line_comment) @comment
(block_comment) @comment

(use_declaration) @definition.import

(extern_crate_declaration
  name: (identifier) @name.reference.module) @definition.import

(struct_item
  name: (type_identifier) @name.definition.class) @definition.class

(enum_item
  name: (type_identifier) @name.definition.class) @definition.class

(union_item
  name: (type_identifier) @name.definition.class) @definition.class

(type_item
  name: (type_identifier) @name.definition.class) @definition.class

(function_item
  name: (identifier) @name.definition.function) @definition.function

(function_signature_item
  name: (identifier) @name.definition.function) @definition.function

(trait_item
  name: (type_identifier) @name.definition.interface) @definition.interface

(mod_item
  name: (identifier) @name.definition.module) @definition.module

(macro_definition
  name: (identifier) @name.definition.macro) @definition.macro

(impl_item
  type: (type_identifier) @name.reference.implementation) @reference.implementation

(call_expression
  function: (identifier) @name.reference.call) @reference.call

(call_expression
  function: (field_expression
    field: (field_identifier) @name.reference.call)) @reference.call

(macro_invocation
  macro: (identifier) @name.reference.call) @reference.call
"""

QUERY_JAVA = """
(line_comment) @comment
(block_comment) @comment

(import_declaration) @definition.import

(class_declaration
  name: (identifier) @name.definition.class) @definition.class

(record_declaration
  name: (identifier) @name.definition.class) @definition.class

(interface_declaration
  name: (identifier) @name.definition.interface) @definition.interface

(enum_declaration
  name: (identifier) @name.definition.enum) @definition.enum

(method_declaration
  name: (identifier) @name.definition.method) @definition.method

(constructor_declaration
  name: (identifier) @name.definition.method) @definition.method

(method_invocation
  name: (identifier) @name.reference.call) @reference.call

(object_creation_expression
  type: (type_identifier) @name.reference.class) @reference.class
"""

QUERY_C = """
(comment) @comment

(preproc_include) @definition.import

(function_definition
  declarator: (function_declarator
    declarator: (identifier) @name.definition.function)) @definition.function

(declaration
  declarator: (function_declarator
    declarator: (identifier) @name.definition.function)) @definition.function

(struct_specifier
  name: (type_identifier) @name.definition.class
  body: (_)) @definition.class

(enum_specifier
  name: (type_identifier) @name.definition.type
  body: (_)) @definition.type

(type_definition
  declarator: (type_identifier) @name.definition.type) @definition.type

(call_expression
  function: (identifier) @name.reference.call) @reference.call
"""

QUERY_CPP = """
(comment) @comment

(preproc_include) @definition.import

(function_definition
  declarator: (function_declarator
    declarator: (identifier) @name.definition.function)) @definition.function

(function_definition
  declarator: (function_declarator
    declarator: (qualified_identifier) @name.definition.method)) @definition.method

(function_definition
  declarator: (function_declarator
    declarator: (field_identifier) @name.definition.method)) @definition.method

(declaration
  declarator: (function_declarator
    declarator: (identifier) @name.definition.function)) @definition.function

(class_specifier
  name: (type_identifier) @name.definition.class
  body: (_)) @definition.class

(struct_specifier
  name: (type_identifier) @name.definition.class
  body: (_)) @definition.class

(enum_specifier
  name: (type_identifier) @name.definition.type
  body: (_)) @definition.type

(namespace_definition
  name: (_) @name.definition.module) @definition.module

(call_expression
  function: (identifier) @name.reference.call) @reference.call

(call_expression
  function: (field_expression
    field: (field_identifier) @name.reference.call)) @reference.call

(call_expression
  function: (qualified_identifier
    name: (identifier) @name.reference.call)) @reference.call
"""

QUERIES: dict[Language, str] = {
    Language.PYTHON: QUERY_PYTHON,
    Language.JAVASCRIPT: QUERY_JAVASCRIPT,
    Language.TYPESCRIPT: QUERY_TYPESCRIPT,
    Language.TSX: QUERY_TYPESCRIPT,
    Language.GO: QUERY_GO,
    Language.RUST: QUERY_RUST,
    Language.JAVA: QUERY_JAVA,
    Language.C: QUERY_C,
    Language.CPP: QUERY_CPP,
}
