"""
Merkle Tree Unit Tests
Tests for core/merkle/merkle_tree.py

Covered behavior:
1. Fixed depth - every tree has exactly `depth` layers, every proof `depth` entries
2. Padding - odd layers duplicate their last node; roots are self-paired up to depth
3. Round trip - a proof for every leaf folds back to the root
4. Tamper detection - changed sibling/leaf/direction/root fails verification
5. Cache consistency - proving against a cached tree equals proving from scratch
6. Error cases - empty input, absent leaf, malformed proof, depth exceeded
"""
import pytest

from core.crypto.hashing import FIELD_MODULUS, sha256_field_hash
from core.merkle.merkle_tree import (
    MAX_TREE_DEPTH,
    TREE_LEVELS,
    CircuitPath,
    Direction,
    MerkleProof,
    ProofEntry,
    build_merkle_root,
    build_merkle_tree,
    compute_root_from_proof,
    compute_tree_depth,
    encode_for_circuit,
    generate_merkle_proof,
    max_leaves_for_depth,
    verify_merkle_proof,
)
from core.schemas.errors import (
    EmptyInputException,
    ErrorCodes,
    InvalidElementException,
    LeafNotFoundException,
    MalformedProofException,
    TreeDepthExceededException,
)

from fixtures.common import additive_hash, linear_hash, make_leaves


class TestScenario:
    """The [1, 2, 3] tree at depth 4 under H(a, b) = a + b."""

    def test_layers(self):
        tree = build_merkle_tree([1, 2, 3], 4, additive_hash)

        assert tree.layers == ((1, 2, 3, 3), (3, 6), (9, 9), (18,))
        assert tree.root == 18
        assert tree.leaves == (1, 2, 3)

    def test_proof_for_second_leaf(self):
        tree = build_merkle_tree([1, 2, 3], 4, additive_hash)
        proof = generate_merkle_proof(2, [1, 2, 3], tree)

        assert list(proof) == [
            (2, Direction.RIGHT),
            (1, Direction.LEFT),
            (6, Direction.RIGHT),
            (9, Direction.RIGHT),
        ]

    def test_proof_folds_to_root(self):
        proof = generate_merkle_proof(2, [1, 2, 3], depth=4, hash_fn=additive_hash)

        assert compute_root_from_proof(proof, additive_hash) == 18
        assert verify_merkle_proof(proof, 18, additive_hash, expected_depth=4)

    def test_proof_for_padded_leaf(self):
        """The last leaf of an odd layer is its own sibling."""
        proof = generate_merkle_proof(3, [1, 2, 3], depth=4, hash_fn=additive_hash)

        assert list(proof) == [
            (3, Direction.LEFT),
            (3, Direction.RIGHT),
            (3, Direction.LEFT),
            (9, Direction.RIGHT),
        ]
        assert compute_root_from_proof(proof, additive_hash) == 18

    def test_circuit_encoding(self):
        proof = generate_merkle_proof(2, [1, 2, 3], depth=4, hash_fn=additive_hash)
        path = encode_for_circuit(proof)

        assert path == CircuitPath(path_elements=(2, 1, 6, 9), path_indices=(1, 0, 1, 1))
        assert path.to_dict() == {
            "pathElements": ["2", "1", "6", "9"],
            "pathIndices": [1, 0, 1, 1],
        }


class TestEmptyTree:
    """Tests for empty tree behavior."""

    def test_build_empty_returns_empty_tree(self):
        tree = build_merkle_tree([], 4, additive_hash)

        assert tree.is_empty
        assert tree.layers == ()
        assert tree.root is None

    def test_build_root_empty_is_none(self):
        assert build_merkle_root([]) is None

    def test_prove_empty_leaves_raises(self):
        with pytest.raises(EmptyInputException) as exc_info:
            generate_merkle_proof(1, [])

        assert exc_info.value.code == ErrorCodes.EMPTY_INPUT

    def test_empty_input_is_leaf_not_found(self):
        """Callers catching LeafNotFoundException also see empty input."""
        with pytest.raises(LeafNotFoundException):
            generate_merkle_proof(1, [], depth=4, hash_fn=additive_hash)

    def test_prove_against_empty_cached_tree_raises(self):
        empty = build_merkle_tree([], 4, additive_hash)

        with pytest.raises(EmptyInputException):
            generate_merkle_proof(1, [1], empty)


class TestSingleLeaf:
    """Tests for single leaf trees."""

    def test_depth_one_root_is_leaf(self):
        tree = build_merkle_tree([5], 1, additive_hash)

        assert tree.layers == ((5,),)
        assert tree.root == 5

    def test_depth_one_proof_has_only_leaf(self):
        proof = generate_merkle_proof(5, [5], depth=1, hash_fn=additive_hash)

        assert list(proof) == [(5, Direction.LEFT)]
        assert compute_root_from_proof(proof, additive_hash) == 5

    def test_single_leaf_padded_to_depth(self):
        tree = build_merkle_tree([5], 3, additive_hash)

        assert tree.layers == ((5, 5), (10, 10), (20,))
        proof = generate_merkle_proof(5, [5], tree)
        assert list(proof) == [
            (5, Direction.LEFT),
            (5, Direction.RIGHT),
            (10, Direction.RIGHT),
        ]

    def test_zero_is_a_valid_leaf(self):
        tree = build_merkle_tree([0, 1], 2, additive_hash)

        assert tree.root == 1
        proof = generate_merkle_proof(0, [0, 1], tree)
        assert proof.leaf == 0
        assert verify_merkle_proof(proof, 1, additive_hash)


class TestPaddingCorrectness:
    """Tests for odd-layer duplication and depth padding."""

    def test_odd_leaf_count_duplicates_last(self):
        tree = build_merkle_tree([1, 2, 3], 4, additive_hash)

        assert tree.layers[0] == (1, 2, 3, 3)

    def test_odd_leaf_count_root_matches_explicit_duplicate(self):
        odd = build_merkle_tree([11, 22, 33], 4, linear_hash)
        explicit = build_merkle_tree([11, 22, 33, 33], 4, linear_hash)

        assert odd.root == explicit.root
        assert odd.layers == explicit.layers

    def test_five_leaves(self):
        tree = build_merkle_tree(make_leaves(5), 5, additive_hash)

        assert tree.layers == (
            (1, 2, 3, 4, 5, 5),
            (3, 7, 10, 10),
            (10, 20),
            (30, 30),
            (60,),
        )

    def test_padded_proof_for_last_of_five(self):
        tree = build_merkle_tree(make_leaves(5), 5, additive_hash)
        proof = generate_merkle_proof(5, tree.leaves, tree)

        assert list(proof) == [
            (5, Direction.LEFT),
            (5, Direction.RIGHT),
            (10, Direction.RIGHT),
            (10, Direction.LEFT),
            (30, Direction.RIGHT),
        ]
        assert compute_root_from_proof(proof, additive_hash) == 60

    def test_non_final_layers_even(self):
        for count in (1, 2, 3, 5, 7, 9, 17):
            tree = build_merkle_tree(make_leaves(count), 6, linear_hash)
            for layer in tree.layers[:-1]:
                assert len(layer) % 2 == 0
            assert len(tree.layers[-1]) == 1

    def test_root_padding_uses_self_pairs(self):
        tree = build_merkle_tree([1, 2], 4, linear_hash)
        natural_root = linear_hash(1, 2)

        assert tree.layers[1] == (natural_root, natural_root)
        padded = linear_hash(natural_root, natural_root)
        assert tree.layers[2] == (padded, padded)
        assert tree.root == linear_hash(padded, padded)

    def test_leaves_are_not_mutated(self):
        leaves = [1, 2, 3]
        build_merkle_tree(leaves, 4, additive_hash)

        assert leaves == [1, 2, 3]


class TestFixedDepth:
    """Every tree has depth layers; every proof has depth entries."""

    @pytest.mark.parametrize("count", [1, 2, 3, 5, 17])
    def test_layer_count_and_proof_length(self, count):
        leaves = make_leaves(count)
        tree = build_merkle_tree(leaves, 6, linear_hash)

        assert tree.layer_count == 6
        for leaf in leaves:
            proof = generate_merkle_proof(leaf, leaves, tree)
            assert len(proof) == 6
            assert len(encode_for_circuit(proof).path_elements) == 6

    def test_default_depth_and_hash(self):
        tree = build_merkle_tree([1, 2, 3])

        assert tree.depth == TREE_LEVELS
        assert tree.layer_count == TREE_LEVELS
        proof = generate_merkle_proof(2, [1, 2, 3], tree)
        assert verify_merkle_proof(proof, tree.root, expected_depth=TREE_LEVELS)

    def test_default_hash_is_sha256_field(self):
        assert build_merkle_root([1, 2], 2) == sha256_field_hash(1, 2)


class TestRoundTrip:
    """A proof for every leaf folds to the root."""

    @pytest.mark.parametrize("count", [1, 2, 3, 4, 5, 8, 13, 16])
    def test_every_leaf_verifies(self, count):
        leaves = make_leaves(count, start=100)
        tree = build_merkle_tree(leaves, 5, linear_hash)

        for leaf in leaves:
            proof = generate_merkle_proof(leaf, leaves, tree)
            assert compute_root_from_proof(proof, linear_hash, expected_depth=5) == tree.root

    def test_large_elements_survive(self):
        big = 2**200 + 7
        tree = build_merkle_tree([big, 3], 3, additive_hash)
        proof = generate_merkle_proof(big, [big, 3], tree)

        assert proof.leaf == big
        assert verify_merkle_proof(proof, big + 3 + big + 3, additive_hash)

    def test_root_is_deterministic(self):
        leaves = make_leaves(7)

        roots = {build_merkle_root(leaves, 5, linear_hash) for _ in range(5)}
        assert len(roots) == 1

    def test_leaf_order_matters(self):
        assert build_merkle_root([1, 2, 3], 4, linear_hash) != build_merkle_root(
            [3, 2, 1], 4, linear_hash
        )


class TestTamperDetection:
    """Sixteen distinct leaves at depth 5 leave no self-paired layers."""

    @pytest.fixture
    def setup(self):
        leaves = make_leaves(16)
        tree = build_merkle_tree(leaves, 5, linear_hash)
        return leaves, tree

    def test_tampered_sibling_fails(self, setup):
        leaves, tree = setup
        proof = generate_merkle_proof(6, leaves, tree)

        for i in range(1, len(proof)):
            entries = list(proof)
            entries[i] = ProofEntry(entries[i].hash + 1, entries[i].direction)
            assert not verify_merkle_proof(entries, tree.root, linear_hash)

    def test_flipped_sibling_direction_fails(self, setup):
        leaves, tree = setup
        proof = generate_merkle_proof(6, leaves, tree)

        for i in range(1, len(proof)):
            entries = list(proof)
            flipped = Direction.LEFT if entries[i].direction == Direction.RIGHT else Direction.RIGHT
            entries[i] = ProofEntry(entries[i].hash, flipped)
            assert not verify_merkle_proof(entries, tree.root, linear_hash)

    def test_tampered_leaf_fails(self, setup):
        leaves, tree = setup
        proof = generate_merkle_proof(6, leaves, tree)
        entries = list(proof)
        entries[0] = ProofEntry(99, entries[0].direction)

        assert not verify_merkle_proof(entries, tree.root, linear_hash)

    def test_wrong_root_fails(self, setup):
        leaves, tree = setup
        proof = generate_merkle_proof(6, leaves, tree)

        assert not verify_merkle_proof(proof, tree.root + 1, linear_hash)

    def test_leaf_direction_is_informational(self, setup):
        leaves, tree = setup
        proof = generate_merkle_proof(6, leaves, tree)
        entries = list(proof)
        entries[0] = ProofEntry(entries[0].hash, Direction.LEFT)

        assert verify_merkle_proof(entries, tree.root, linear_hash)


class TestCacheConsistency:
    """Proving against a cached tree matches proving from scratch."""

    def test_cached_equals_fresh(self):
        leaves = make_leaves(11)
        tree = build_merkle_tree(leaves, 6, linear_hash)

        for leaf in leaves:
            cached = generate_merkle_proof(leaf, leaves, tree)
            fresh = generate_merkle_proof(leaf, leaves, depth=6, hash_fn=linear_hash)
            assert cached == fresh

    def test_duplicate_leaf_proves_first_occurrence(self):
        tree = build_merkle_tree([7, 8, 7], 3, linear_hash)
        proof = generate_merkle_proof(7, tree.leaves, tree)

        assert proof[0] == (7, Direction.LEFT)
        assert proof[1] == (8, Direction.RIGHT)
        assert tree.leaf_index(7) == 0


class TestProofGenerationErrors:
    """Leaf lookup failures."""

    def test_absent_leaf_raises(self):
        with pytest.raises(LeafNotFoundException) as exc_info:
            generate_merkle_proof(99, [1, 2, 3], depth=4, hash_fn=additive_hash)

        assert not isinstance(exc_info.value, EmptyInputException)
        assert exc_info.value.code == ErrorCodes.LEAF_NOT_FOUND
        assert exc_info.value.details["leaf"] == "99"

    @pytest.mark.parametrize("leaf", ["2", -1, True, 2.0, None])
    def test_invalid_leaf_raises_not_found(self, leaf):
        with pytest.raises(LeafNotFoundException):
            generate_merkle_proof(leaf, [1, 2, 3], depth=4, hash_fn=additive_hash)


class TestBuildErrors:
    """Invalid build inputs."""

    def test_too_many_leaves_for_depth(self):
        with pytest.raises(TreeDepthExceededException) as exc_info:
            build_merkle_tree(make_leaves(5), 3, additive_hash)

        assert exc_info.value.details == {"leaf_count": 5, "required_depth": 4, "depth": 3}

    def test_exactly_full_tree_fits(self):
        tree = build_merkle_tree(make_leaves(4), 3, additive_hash)

        assert tree.layers == ((1, 2, 3, 4), (3, 7), (10,))

    @pytest.mark.parametrize("leaf", [-1, "1", 1.5, True])
    def test_invalid_leaf_raises(self, leaf):
        with pytest.raises(InvalidElementException):
            build_merkle_tree([1, leaf], 4, additive_hash)

    @pytest.mark.parametrize("depth", [0, -3, True])
    def test_invalid_depth_raises(self, depth):
        with pytest.raises(ValueError):
            build_merkle_tree([1], depth, additive_hash)

    def test_depth_above_maximum_raises(self):
        with pytest.raises(ValueError, match="exceeds the maximum"):
            build_merkle_tree([1], MAX_TREE_DEPTH + 1, additive_hash)

    def test_maximum_depth_builds(self):
        tree = build_merkle_tree([1], MAX_TREE_DEPTH, additive_hash)

        assert tree.layer_count == MAX_TREE_DEPTH
        assert tree.root == 2 ** (MAX_TREE_DEPTH - 1)

    def test_unreduced_leaf_raises_with_field_hash(self):
        with pytest.raises(InvalidElementException) as exc_info:
            build_merkle_tree([FIELD_MODULUS, 1], 4)

        assert exc_info.value.code == ErrorCodes.INVALID_ELEMENT


class TestMalformedProof:
    """Proof shape validation during folding."""

    def test_empty_proof(self):
        with pytest.raises(MalformedProofException):
            compute_root_from_proof([], additive_hash)

    def test_wrong_length(self):
        proof = generate_merkle_proof(2, [1, 2, 3], depth=4, hash_fn=additive_hash)

        with pytest.raises(MalformedProofException) as exc_info:
            verify_merkle_proof(proof, 18, additive_hash, expected_depth=5)

        assert exc_info.value.code == ErrorCodes.MALFORMED_PROOF
        assert exc_info.value.details["expected"] == 5

    @pytest.mark.parametrize(
        "bad_entry",
        [(1, 2), (1, True), (-1, 0), ("1", 0), (1,), 7],
    )
    def test_bad_entry(self, bad_entry):
        entries = [(2, 1), bad_entry, (6, 1)]

        with pytest.raises(MalformedProofException) as exc_info:
            compute_root_from_proof(entries, additive_hash)

        assert exc_info.value.details["entry_index"] == 1

    def test_plain_pairs_accepted(self):
        assert compute_root_from_proof([(2, 1), (1, 0), (6, 1), (9, 1)], additive_hash) == 18

    def test_unreduced_sibling_with_field_hash(self):
        with pytest.raises(InvalidElementException):
            compute_root_from_proof([(1, 0), (FIELD_MODULUS, 1)])


class TestDepthHelpers:
    """compute_tree_depth / max_leaves_for_depth."""

    @pytest.mark.parametrize(
        "count,depth",
        [(0, 0), (1, 1), (2, 2), (3, 3), (4, 3), (5, 4), (8, 4), (9, 5), (16, 5), (17, 6)],
    )
    def test_compute_tree_depth(self, count, depth):
        assert compute_tree_depth(count) == depth

    def test_max_leaves_for_depth(self):
        assert max_leaves_for_depth(1) == 1
        assert max_leaves_for_depth(3) == 4
        assert max_leaves_for_depth(TREE_LEVELS) == 2**19


class TestMerkleProofType:
    """MerkleProof container behavior."""

    def test_from_pairs(self):
        proof = MerkleProof.from_pairs([(2, 1), (1, 0)])

        assert proof.leaf == 2
        assert proof.depth == 2
        assert proof.siblings == (ProofEntry(1, Direction.LEFT),)
        assert proof[0].direction is Direction.RIGHT
