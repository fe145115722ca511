# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

from swiftgen.codegen.codable import render_enum_codable, render_struct_codable
from swiftgen.codegen.model import Field, PayloadSlot, Variant
from swiftgen.config import GenConfig

PROFILE_FIELDS = [Field(name="id", type="Int"), Field(name="name", type="String", default='"anon"')]

RESULT_VARIANTS = [
	Variant(name="success", payload=(PayloadSlot(label="v0", type="Int", explicit=False),)),
	Variant(
		name="failure",
		payload=(PayloadSlot(label="code", type="Int"), PayloadSlot(label="message", type="String")),
	),
	Variant(name="pending"),
]


def test_struct_codable_encodes_and_decodes_every_field_in_order():
	text = render_struct_codable("Profile", PROFILE_FIELDS)
	assert text == """\
extension Profile: Codable {
    enum CodingKeys: String, CodingKey {
        case id, name
    }

    func encode(to encoder: Encoder) throws {
        var container = encoder.container(keyedBy: CodingKeys.self)
        try container.encode(id, forKey: .id)
        try container.encode(name, forKey: .name)
    }

    init(from decoder: Decoder) throws {
        let container = try decoder.container(keyedBy: CodingKeys.self)
        self.init(
            id: try container.decode(Int.self, forKey: .id),
            name: try container.decode(String.self, forKey: .name)
        )
    }
}"""


def test_public_class_codable_uses_public_convenience_init():
	text = render_struct_codable("Node", PROFILE_FIELDS, is_public=True, is_class=True)
	assert "    public func encode(to encoder: Encoder) throws {" in text
	assert "    public convenience init(from decoder: Decoder) throws {" in text


def test_struct_without_fields_renders_trivial_codable():
	text = render_struct_codable("Marker", [])
	assert "enum CodingKeys: CodingKey {}" in text
	assert "_ = encoder.container(keyedBy: CodingKeys.self)" in text
	assert "_ = try decoder.container(keyedBy: CodingKeys.self)" in text
	assert "        self.init()" in text


def test_enum_codable_dispatches_on_payload_arity():
	text = render_enum_codable("Result", RESULT_VARIANTS)
	assert text == """\
extension Result: Codable {
    enum CodingKeys: String, CodingKey {
        case success, failure, pending
    }

    enum FailureCodingKeys: CodingKey {
        case _0, _1
    }

    func encode(to encoder: Encoder) throws {
        var container = encoder.container(keyedBy: CodingKeys.self)
        switch self {
        case .success(let p_v0):
            try container.encode(p_v0, forKey: .success)
        case .failure(let p_code, let p_message):
            var nestedContainer = container.nestedContainer(keyedBy: FailureCodingKeys.self, forKey: .failure)
            try nestedContainer.encode(p_code, forKey: ._0)
            try nestedContainer.encode(p_message, forKey: ._1)
        case .pending:
            try container.encodeNil(forKey: .pending)
        }
    }

    init(from decoder: Decoder) throws {
        let container = try decoder.container(keyedBy: CodingKeys.self)
        guard container.allKeys.count == 1, let key = container.allKeys.first else {
            throw DecodingError.dataCorrupted(
                DecodingError.Context(
                    codingPath: container.codingPath,
                    debugDescription: "Unable to decode Result: no valid case found."
                )
            )
        }
        switch key {
        case .success:
            let p_v0 = try container.decode(Int.self, forKey: .success)
            self = .success(p_v0)
        case .failure:
            let nestedContainer = try container.nestedContainer(keyedBy: FailureCodingKeys.self, forKey: .failure)
            let (p_code, p_message): (Int, String) = (
                try nestedContainer.decode(Int.self, forKey: ._0),
                try nestedContainer.decode(String.self, forKey: ._1)
            )
            self = .failure(code: p_code, message: p_message)
        case .pending:
            _ = try container.decodeNil(forKey: .pending)
            self = .pending
        }
    }
}"""


def test_nested_decode_reads_one_positional_key_per_slot():
	triple = Variant(
		name="point",
		payload=tuple(PayloadSlot(label=f"v{i}", type="Double", explicit=False) for i in range(3)),
	)
	text = render_enum_codable("Shape", [triple])

	assert "    enum PointCodingKeys: CodingKey {\n        case _0, _1, _2\n    }" in text
	reads = [line.strip() for line in text.splitlines() if "nestedContainer.decode(" in line]
	assert reads == [
		"try nestedContainer.decode(Double.self, forKey: ._0),",
		"try nestedContainer.decode(Double.self, forKey: ._1),",
		"try nestedContainer.decode(Double.self, forKey: ._2)",
	]
	assert "self = .point(p_v0, p_v1, p_v2)" in text


def test_single_labeled_slot_is_passed_with_its_label():
	text = render_enum_codable("Wrapper", [Variant(name="value", payload=(PayloadSlot(label="inner", type="[Int]"),))])
	assert "let p_inner = try container.decode([Int].self, forKey: .value)" in text
	assert "self = .value(inner: p_inner)" in text
	assert "ValueCodingKeys" not in text


def test_empty_payload_case_is_treated_as_no_payload():
	text = render_enum_codable("Tick", [Variant(name="tick", payload=())])
	assert "case .tick:\n            try container.encodeNil(forKey: .tick)" in text
	assert "self = .tick()" in text


def test_enum_without_cases_always_fails_to_decode():
	text = render_enum_codable("Nothing", [], is_public=True)
	assert "enum CodingKeys: CodingKey {}" in text
	assert "public func encode(to encoder: Encoder) throws {\n        switch self {\n        }\n    }" in text
	assert "guard container.allKeys.count" not in text
	assert 'debugDescription: "Unable to decode Nothing: no valid case found."' in text


def test_indent_width_follows_configuration():
	text = render_struct_codable("P", [Field(name="x", type="Int")], config=GenConfig(indent=2))
	assert "  enum CodingKeys: String, CodingKey {\n    case x\n  }" in text


def test_payload_named_like_a_local_is_bound_under_a_prefix():
	variants = [Variant(name="boxed", payload=(PayloadSlot(label="container", type="String"),))]
	text = render_enum_codable("Box", variants)

	assert "        case .boxed(let p_container):\n            try container.encode(p_container, forKey: .boxed)" in text
	assert "let p_container = try container.decode(String.self, forKey: .boxed)" in text
	assert "self = .boxed(container: p_container)" in text
