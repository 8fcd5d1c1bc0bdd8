import pytest

from comptree.analysis.declarations import resolve_default_export
from comptree.analysis.elements import flatten_markup, potentially_rendered_elements, render_output
from comptree.core.engine.ast_handler import get_ast_handler
from comptree.core.error_handling import InvalidDeclarationError, NonMarkupReturnError

from conftest import fixture_path, parse_code


def _elements(code_text):
    root, code = parse_code(code_text)
    return potentially_rendered_elements(resolve_default_export(root, code), code)


def test_class_component_elements_include_root_and_descendants():
    with open(fixture_path("App.jsx"), encoding="utf8") as fh:
        root, code = get_ast_handler().parse(fh.read())
    names = potentially_rendered_elements(resolve_default_export(root, code), code)
    assert names == {"div", "TestClassComponent", "TestPureComponent", "TestAnonComponent"}


def test_flatten_keeps_duplicates_in_document_order():
    with open(fixture_path("App.jsx"), encoding="utf8") as fh:
        root, code = get_ast_handler().parse(fh.read())
    markup = render_output(resolve_default_export(root, code), code)
    assert list(flatten_markup(markup, code)) == [
        "div", "div", "div", "TestClassComponent", "TestPureComponent", "TestAnonComponent",
    ]


def test_duplicate_tags_collapse():
    names = _elements('''
        class List extends Component {
          render() {
            return (
              <ul>
                <Item />
                <Item />
                <li><Item /></li>
              </ul>
            );
          }
        }
        export default List;
    ''')
    assert names == {"ul", "Item", "li"}


def test_self_closing_root():
    names = _elements('''
        const Leaf = (props) => {
          return <Icon />;
        };
        export default Leaf;
    ''')
    assert names == {"Icon"}


def test_arrow_expression_body_returns_markup():
    names = _elements('''
        const Short = () => (
          <div><Child /></div>
        );
        export default Short;
    ''')
    assert names == {"div", "Child"}


def test_member_expression_names_use_full_text():
    names = _elements('''
        function Themed() {
          return <Theme.Provider><Child /></Theme.Provider>;
        }
        export default Themed;
    ''')
    assert names == {"Theme.Provider", "Child"}


def test_markup_inside_expression_containers_is_not_collected():
    names = _elements('''
        function Listing({ items }) {
          return (
            <div>
              {items.map(item => <Row key={item} />)}
            </div>
          );
        }
        export default Listing;
    ''')
    assert names == {"div"}


def test_conditional_return_is_not_recognised():
    with pytest.raises(NonMarkupReturnError):
        _elements('''
            function Maybe(props) {
              return props.show ? <div /> : null;
            }
            export default Maybe;
        ''')


def test_return_through_variable_is_not_recognised():
    with pytest.raises(NonMarkupReturnError):
        _elements('''
            function Indirect() {
              const view = <div />;
              return view;
            }
            export default Indirect;
        ''')


def test_missing_return_raises():
    with pytest.raises(NonMarkupReturnError):
        _elements('''
            function Silent() {
              console.log('nothing');
            }
            export default Silent;
        ''')


def test_fragment_root_is_not_markup():
    with pytest.raises(NonMarkupReturnError):
        _elements('''
            function Grouped() {
              return (<><div /></>);
            }
            export default Grouped;
        ''')


def test_missing_declaration_raises():
    root, code = parse_code('''
        import Other from './Other';
        export default Other;
    ''')
    with pytest.raises(InvalidDeclarationError):
        potentially_rendered_elements(resolve_default_export(root, code), code)


def test_deeply_nested_markup_is_flattened():
    depth = 1200
    names = _elements(
        "function Deep() {\n  return (" + "<div>" * depth + "<Leaf />" + "</div>" * depth + ");\n}\n"
        "export default Deep;\n"
    )
    assert names == {"div", "Leaf"}
