from panda_docs.index.dependency import DependencyIndex


class TestDependencyIndex:
    def test_add_creates_and_extends_sets(self):
        index = DependencyIndex()
        index.add("_data/shared.json", "a.json")
        index.add("_data/shared.json", "b.json")
        assert index["_data/shared.json"] == {"a.json", "b.json"}
        assert len(index) == 1

    def test_empty_paths_and_self_loops_are_ignored(self):
        index = DependencyIndex()
        index.add("", "a.json")
        index.add("a.json", "a.json")
        assert len(index) == 0

    def test_add_all_is_idempotent(self):
        index = DependencyIndex()
        index.add_all(["x.json", "y.json"], "a.json")
        index.add_all(["x.json", "y.json"], "a.json")
        assert index.to_dict() == {"x.json": ["a.json"], "y.json": ["a.json"]}

    def test_dependents_of_unknown_file(self):
        assert DependencyIndex().dependents("x.json") == set()

    def test_dependents_returns_a_copy(self):
        index = DependencyIndex()
        index.add("x.json", "a.json")
        index.dependents("x.json").add("b.json")
        assert index.dependents("x.json") == {"a.json"}

    def test_equality(self):
        first, second = DependencyIndex(), DependencyIndex()
        first.add("x.json", "a.json")
        second.add("x.json", "a.json")
        assert first == second
