from __future__ import annotations

import sys
import unittest
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[3]
SRC_ROOT = REPO_ROOT / "tools" / "objc_bridge_core" / "src"
if str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))

from objc_bridge_core.common import (
    KindAmbiguityError,
    MissingAttributeError,
    SchemaParseError,
    StructuralMismatchError,
    UnsupportedShapeError,
)
from objc_bridge_core.declarations import (
    Alias,
    ClassDecl,
    Enumeration,
    Extern,
    Framework,
    Module,
    ProtocolDecl,
    Structure,
    Use,
    build_framework,
)
from objc_bridge_core.members import (
    KIND_ERROR,
    KIND_GENERIC,
    KIND_PROTOCOL,
    KIND_TYPE,
    Argument,
    Field,
    Function,
    Initializer,
    Method,
    Property,
    ReturnValue,
    Script,
    Static,
    Text,
    Value,
)
from objc_bridge_core.schema import parse


class SchemaParseTests(unittest.TestCase):
    def test_parse_exposes_label_attributes_and_children(self) -> None:
        node = parse('<framework module="demo"><alias name="A" type="u8"/></framework>')

        self.assertEqual(node.label, "framework")
        self.assertEqual(node.get("module"), "demo")
        self.assertEqual([child.label for child in node.children], ["alias"])
        self.assertEqual(node.children[0].attributes, {"name": "A", "type": "u8"})

    def test_text_between_elements_becomes_text_children(self) -> None:
        node = parse('<protocol name="P">hello<method selector="x"/>world</protocol>')

        self.assertEqual([child.label for child in node.children], ["text", "method", "text"])
        self.assertEqual(node.children[0].text, "hello")

    def test_whitespace_only_text_is_not_a_child(self) -> None:
        node = parse("<framework>\n  <alias name='A' type='u8'/>\n</framework>")
        self.assertEqual([child.label for child in node.children], ["alias"])

    def test_malformed_markup_raises_schema_parse_error(self) -> None:
        with self.assertRaises(SchemaParseError):
            parse("<framework><protocol></framework>")


class DeclarationBuilderTests(unittest.TestCase):
    def test_label_mismatch_is_structural_error(self) -> None:
        with self.assertRaises(StructuralMismatchError) as ctx:
            ProtocolDecl.from_node(parse('<class name="Foo"/>'))
        self.assertIn("expected node name 'protocol' but got 'class'", str(ctx.exception))

    def test_root_must_be_framework(self) -> None:
        with self.assertRaises(StructuralMismatchError):
            build_framework(parse('<protocol name="Foo"/>'))

    def test_unknown_children_are_dropped(self) -> None:
        framework = build_framework(
            parse(
                '<framework module="demo">'
                '<bogus name="x"/>'
                '<alias name="A" type="u8"/>'
                'stray text'
                '<protocol name="P"><ivar name="y"/><method selector="run"/></protocol>'
                "</framework>"
            )
        )

        self.assertIsInstance(framework, Framework)
        self.assertEqual(len(framework.children), 2)
        protocol = framework.children[1]
        self.assertEqual([type(child) for child in protocol.children], [Method])

    def test_protocol_keeps_text_children(self) -> None:
        protocol = ProtocolDecl.from_node(parse('<protocol name="P">note<method selector="run"/></protocol>'))
        self.assertIsInstance(protocol.children[0], Text)

    def test_no_prelude_flag_and_module(self) -> None:
        framework = build_framework(parse('<framework module="m" no-prelude=""/>'))
        self.assertEqual(framework.module, "m")
        self.assertTrue(framework.no_prelude)
        self.assertEqual(framework.children, ())

    def test_inherits_merges_platform_list_first_and_keeps_duplicates(self) -> None:
        protocol = ProtocolDecl.from_node(
            parse('<protocol name="P" inherits_mac=" A, B" inherits="B ,C"/>')
        )
        self.assertEqual(protocol.inherits, ("A", "B", "B", "C"))

    def test_inherits_honors_selected_platform(self) -> None:
        node = parse('<protocol name="P" inherits_mac="A" inherits_ios="UIKitThing" inherits="C"/>')
        self.assertEqual(ProtocolDecl.from_node(node, platform="ios").inherits, ("UIKitThing", "C"))

    def test_class_is_built_as_class_decl(self) -> None:
        framework = build_framework(parse('<framework><class name="NSView" inherits="NSObject"/></framework>'))
        self.assertIsInstance(framework.children[0], ClassDecl)
        self.assertIsInstance(framework.children[0], ProtocolDecl)


class MemberKindTests(unittest.TestCase):
    def test_argument_kinds(self) -> None:
        self.assertEqual(Argument.from_node(parse('<argument name="e" error="NSError"/>')).kind, KIND_ERROR)
        self.assertEqual(Argument.from_node(parse('<argument name="p" protocol="NSString"/>')).kind, KIND_PROTOCOL)
        argument = Argument.from_node(parse('<argument name="n" type="i32"/>'))
        self.assertEqual((argument.kind, argument.value), (KIND_TYPE, "i32"))

    def test_argument_with_type_and_protocol_is_ambiguous(self) -> None:
        with self.assertRaises(KindAmbiguityError) as ctx:
            Argument.from_node(parse('<argument name="x" type="i32" protocol="NSString"/>'))
        self.assertIn('<argument name="x">', str(ctx.exception))

    def test_argument_without_kind_is_ambiguous(self) -> None:
        with self.assertRaises(KindAmbiguityError):
            Argument.from_node(parse('<argument name="x"/>'))

    def test_ambiguous_argument_aborts_whole_framework(self) -> None:
        with self.assertRaises(KindAmbiguityError):
            build_framework(
                parse(
                    '<framework><protocol name="P"><method selector="run:">'
                    '<argument name="x" type="i32" protocol="Q"/>'
                    "</method></protocol></framework>"
                )
            )

    def test_return_kinds(self) -> None:
        self.assertEqual(ReturnValue.from_node(parse('<return generic="NSObject"/>')).kind, KIND_GENERIC)
        with self.assertRaises(KindAmbiguityError):
            ReturnValue.from_node(parse('<return type="i32" generic="NSObject"/>'))
        with self.assertRaises(KindAmbiguityError):
            ReturnValue.from_node(parse("<return/>"))

    def test_method_rejects_second_error_argument(self) -> None:
        with self.assertRaises(UnsupportedShapeError):
            Method.from_node(
                parse(
                    '<method selector="a:b:"><argument name="a" error="E"/><argument name="b" error="E"/></method>'
                )
            )

    def test_method_rejects_second_return(self) -> None:
        with self.assertRaises(UnsupportedShapeError):
            Method.from_node(parse('<method selector="a"><return type="i32"/><return type="i64"/></method>'))

    def test_initializer_exposes_error_argument(self) -> None:
        initializer = Initializer.from_node(
            parse(
                '<initializer selector="initWithValue:error:">'
                '<argument name="value" type="i32"/><argument name="error" error="NSError"/>'
                "</initializer>"
            )
        )
        self.assertEqual(initializer.name, "init_with_value_error")
        self.assertIsNotNone(initializer.error_argument)
        self.assertEqual(initializer.error_argument.value, "NSError")

    def test_property_defaults(self) -> None:
        prop = Property.from_node(parse('<property name="title" protocol="NSString" read-only="" weak=""/>'))
        self.assertEqual((prop.getter, prop.setter), ("title", "setTitle"))
        self.assertTrue(prop.read_only)
        self.assertTrue(prop.weak)

    def test_property_explicit_accessors(self) -> None:
        prop = Property.from_node(parse('<property name="hidden" type="bool" getter="isHidden" setter="setHiddenFlag"/>'))
        self.assertEqual((prop.getter, prop.setter), ("isHidden", "setHiddenFlag"))
        self.assertFalse(prop.read_only)

    def test_property_requires_exactly_one_kind(self) -> None:
        with self.assertRaises(KindAmbiguityError):
            Property.from_node(parse('<property name="x"/>'))
        with self.assertRaises(KindAmbiguityError):
            Property.from_node(parse('<property name="x" type="i32" protocol="Q"/>'))

    def test_static_requires_kind(self) -> None:
        self.assertTrue(Static.from_node(parse('<static name="K" type="f64" public=""/>')).public)
        with self.assertRaises(KindAmbiguityError):
            Static.from_node(parse('<static name="K"/>'))


class RequiredAttributeTests(unittest.TestCase):
    CASES = (
        (Argument.from_node, '<argument type="i32"/>', "name"),
        (Property.from_node, '<property type="i32"/>', "name"),
        (Function.from_node, "<function/>", "name"),
        (Static.from_node, '<static type="f64"/>', "name"),
        (Field.from_node, '<field type="u8"/>', "name"),
        (Field.from_node, '<field name="x"/>', "type"),
        (Value.from_node, '<value value="1"/>', "name"),
        (Value.from_node, '<value name="A"/>', "value"),
        (Method.from_node, "<method/>", "selector"),
        (Initializer.from_node, "<initializer/>", "selector"),
        (ProtocolDecl.from_node, "<protocol/>", "name"),
        (ClassDecl.from_node, '<class inherits="NSObject"/>', "name"),
        (Alias.from_node, '<alias type="u8"/>', "name"),
        (Alias.from_node, '<alias name="A"/>', "type"),
        (Enumeration.from_node, '<enumeration type="u32"/>', "name"),
        (Enumeration.from_node, '<enumeration name="E"/>', "type"),
        (Structure.from_node, "<structure/>", "name"),
        (Module.from_node, "<module/>", "name"),
        (Extern.from_node, "<extern/>", "framework"),
    )

    def test_each_missing_attribute_is_named(self) -> None:
        for builder, markup, attribute in self.CASES:
            with self.subTest(markup=markup):
                with self.assertRaises(MissingAttributeError) as ctx:
                    builder(parse(markup))
                self.assertIn(f"missing required attribute '{attribute}'", str(ctx.exception))

    def test_empty_attribute_counts_as_missing(self) -> None:
        with self.assertRaises(MissingAttributeError) as ctx:
            Method.from_node(parse('<method selector=""/>'))
        self.assertIn("<method>", str(ctx.exception))

    def test_kind_value_must_be_non_empty(self) -> None:
        with self.assertRaises(MissingAttributeError):
            Argument.from_node(parse('<argument name="x" type=""/>'))

    def test_error_names_the_offending_node(self) -> None:
        markup = (
            '<framework><protocol name="P"><method selector="run:">'
            '<argument type="i32"/>'
            "</method></protocol></framework>"
        )
        with self.assertRaises(MissingAttributeError) as ctx:
            build_framework(parse(markup))
        self.assertEqual(str(ctx.exception), "missing required attribute 'name' on <argument>")

    def test_use_without_path_is_rejected(self) -> None:
        with self.assertRaises(MissingAttributeError):
            Use.from_node(parse('<use public=""></use>'))


class ScriptContentTests(unittest.TestCase):
    def test_outer_blank_lines_are_trimmed_and_body_kept(self) -> None:
        script = Script.from_node(parse("<script>\n\n    a  \n\n\nb\n  \n</script>"))
        self.assertEqual(script.content, "    a  \n\n\nb")


if __name__ == "__main__":
    unittest.main()
