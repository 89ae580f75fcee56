"""
Tree walker tests
"""

from code_control.parsing.walker import traverse_and_select

JAVA_CODE = """// control T84
public class Test {
    public static void main(String[] args) {
        // control T83
        System.out.println("Hello, World!");
    }
}"""

COMMENT_KINDS = ("comment", "line_comment", "block_comment")


def _descendants(node):
    result = []
    for child in node.children:
        result.append(child)
        result.extend(_descendants(child))
    return result


class TestTraverseAndSelect:
    def test_selector_may_return_a_different_node(self, java_parser):
        """Selector picks the sibling following each comment."""
        code = JAVA_CODE.encode()
        tree = java_parser.parse(code)

        nodes = traverse_and_select(
            tree.root_node,
            lambda node: node.next_sibling if node.type in COMMENT_KINDS else None,
        )

        assert len(nodes) == 2
        assert nodes[0].text.decode() == JAVA_CODE.split("\n", 1)[1]
        assert nodes[1].text.decode() == 'System.out.println("Hello, World!");'

    def test_visits_every_descendant_once_in_preorder(self, js_parser):
        tree = js_parser.parse(b"function add(a, b) {\n  // control T84\n  return a + b;\n}")
        root = tree.root_node

        visited = traverse_and_select(root, lambda node: node)

        expected = _descendants(root)
        assert [n.id for n in visited] == [n.id for n in expected]
        assert len({n.id for n in visited}) == len(visited)

    def test_root_is_not_visited(self, js_parser):
        tree = js_parser.parse(b"let x = 1;")
        root = tree.root_node

        visited = traverse_and_select(root, lambda node: node)

        assert root.id not in {n.id for n in visited}
        assert visited[0].id == root.children[0].id

    def test_root_without_children(self, js_parser):
        tree = js_parser.parse(b"")

        calls = []
        nodes = traverse_and_select(tree.root_node, lambda node: calls.append(node))

        assert nodes == []
        assert calls == []

    def test_walk_stays_inside_subtree(self, js_parser):
        tree = js_parser.parse(b"function f() { a(); }\nfunction g() { b(); }")
        first_function = tree.root_node.children[0]

        identifiers = traverse_and_select(
            first_function,
            lambda node: node if node.type == "identifier" else None,
        )

        assert [n.text.decode() for n in identifiers] == ["f", "a"]

    def test_comment_selection_in_document_order(self, js_parser):
        code = b"// one\nfunction f() {\n  // two\n  return 1;\n}\n/* three */\nf();"
        tree = js_parser.parse(code)

        comments = traverse_and_select(tree.root_node, lambda node: node if node.type == "comment" else None)

        assert [c.text.decode() for c in comments] == ["// one", "// two", "/* three */"]
