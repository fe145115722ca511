# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

from swiftgen.codegen.hashable import render_enum_hashable, render_struct_hashable
from swiftgen.codegen.model import Field, PayloadSlot, Variant
from swiftgen.config import GenConfig

RESULT_VARIANTS = [
	Variant(name="success", payload=(PayloadSlot(label="v0", type="Int", explicit=False),)),
	Variant(
		name="failure",
		payload=(PayloadSlot(label="code", type="Int"), PayloadSlot(label="message", type="String")),
	),
	Variant(name="pending"),
]


def test_struct_equatable_only_by_default():
	text = render_struct_hashable("Point", [Field(name="x", type="Int"), Field(name="y", type="Int")])
	assert text == """\
extension Point: Equatable {
    static func ==(lhs: Point, rhs: Point) -> Bool {
        return lhs.x == rhs.x
            && lhs.y == rhs.y
    }
}"""


def test_struct_all_three_conformances_in_field_order():
	fields = [Field(name="id", type="Int"), Field(name="name", type="String")]
	text = render_struct_hashable("User", fields, is_public=True, hashable=True, stable_hashable=True)
	assert text == """\
extension User: Equatable {
    public static func ==(lhs: User, rhs: User) -> Bool {
        return lhs.id == rhs.id
            && lhs.name == rhs.name
    }
}

extension User: Hashable {
    public func hash(into hasher: inout Hasher) {
        hasher.combine(id)
        hasher.combine(name)
    }
}

extension User: StableHashable {
    public var stableHash: Int {
        var hashValue = 0
        combineHashes(&hashValue, id.stableHash)
        combineHashes(&hashValue, name.stableHash)

        return hashValue
    }
}"""


def test_struct_without_fields_is_trivially_equal():
	text = render_struct_hashable("Marker", [], hashable=True)
	assert "        return true\n" in text
	assert "    func hash(into hasher: inout Hasher) {\n    }" in text


def test_enum_comparisons_start_from_the_discriminant():
	text = render_enum_hashable("Result", RESULT_VARIANTS, hashable=True, stable_hashable=True)
	assert text == """\
extension Result: Equatable {
    var caseName: String {
        switch self {
        case .success: return "success"
        case .failure: return "failure"
        case .pending: return "pending"
        }
    }

    static func ==(lhs: Result, rhs: Result) -> Bool {
        guard lhs.caseName == rhs.caseName else {
            return false
        }
        switch lhs {
        case .success(let l_v0):
            guard case .success(let r_v0) = rhs else { return false }
            guard l_v0 == r_v0 else { return false }
        case .failure(let l_code, let l_message):
            guard case .failure(let r_code, let r_message) = rhs else { return false }
            guard l_code == r_code else { return false }
            guard l_message == r_message else { return false }
        default:
            break
        }

        return true
    }
}

extension Result: Hashable {
    func hash(into hasher: inout Hasher) {
        hasher.combine(caseName)
        switch self {
        case .success(let p_v0):
            hasher.combine(p_v0)
        case .failure(let p_code, let p_message):
            hasher.combine(p_code)
            hasher.combine(p_message)
        default:
            break
        }
    }
}

extension Result: StableHashable {
    var stableHash: Int {
        var hashValue = 0
        combineHashes(&hashValue, caseName.stableHash)
        switch self {
        case .success(let p_v0):
            combineHashes(&hashValue, p_v0.stableHash)
        case .failure(let p_code, let p_message):
            combineHashes(&hashValue, p_code.stableHash)
            combineHashes(&hashValue, p_message.stableHash)
        default:
            break
        }

        return hashValue
    }
}"""


def test_enum_without_payloads_compares_only_discriminants():
	variants = [Variant(name="north"), Variant(name="south"), Variant(name="tick", payload=())]
	text = render_enum_hashable("Direction", variants, hashable=True, stable_hashable=True)

	assert "switch lhs" not in text
	assert "default:" not in text
	assert "        guard lhs.caseName == rhs.caseName else {\n            return false\n        }\n\n        return true" in text
	assert "        hasher.combine(caseName)\n    }" in text
	assert "        combineHashes(&hashValue, caseName.stableHash)\n\n        return hashValue" in text


def test_exhaustive_payload_switch_has_no_default():
	variants = [
		Variant(name="a", payload=(PayloadSlot(label="v0", type="Int", explicit=False),)),
		Variant(name="b", payload=(PayloadSlot(label="v0", type="String", explicit=False),)),
	]
	text = render_enum_hashable("Either", variants, hashable=True)
	assert "switch lhs {" in text
	assert "switch self {\n        case .a(let p_v0):" in text
	assert "default:" not in text


def test_hashing_flags_are_independent():
	variants = [Variant(name="a")]
	equatable_only = render_enum_hashable("E", variants)
	stable_only = render_enum_hashable("E", variants, stable_hashable=True)

	assert "extension E: Equatable" in equatable_only
	assert "Hashable" not in equatable_only
	assert "extension E: Equatable" in stable_only
	assert "extension E: Hashable" not in stable_only
	assert "extension E: StableHashable" in stable_only


def test_stable_hash_names_come_from_configuration():
	config = GenConfig(stable_hash_protocol="Fingerprinted", stable_hash_property="fingerprint", combine_function="mix")
	text = render_struct_hashable("P", [Field(name="x", type="Int")], stable_hashable=True, config=config)
	assert "extension P: Fingerprinted {" in text
	assert "    var fingerprint: Int {" in text
	assert "        mix(&hashValue, x.fingerprint)" in text


def test_backticked_case_names_produce_plain_discriminants():
	text = render_enum_hashable("Keyword", [Variant(name="`default`")])
	assert 'case .`default`: return "default"' in text


def test_payload_bindings_never_shadow_generated_names():
	variants = [
		Variant(name="pair", payload=(PayloadSlot(label="rhs", type="Int"), PayloadSlot(label="hasher", type="Int"))),
		Variant(name="none"),
	]
	text = render_enum_hashable("Clash", variants, hashable=True, stable_hashable=True)

	assert "        case .pair(let l_rhs, let l_hasher):" in text
	assert "            guard case .pair(let r_rhs, let r_hasher) = rhs else { return false }" in text
	assert "            guard l_rhs == r_rhs else { return false }" in text
	assert "            hasher.combine(p_hasher)" in text
	assert "            combineHashes(&hashValue, p_rhs.stableHash)" in text
	assert "let rhs" not in text
	assert "hasher.combine(hasher)" not in text
