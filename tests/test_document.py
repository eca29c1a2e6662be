"""
Document Tests

Markup parsing, script requests and the document event source.

Run with: pytest tests/test_document.py -v
"""

from kigames.document import Document, EventTarget, ScriptRequest
from kigames.games.input import KEYDOWN, KEYUP, KeyEvent

PAGE = """
<html>
<head>
    <script src="/static/app.js" async></script>
    <script>inline()</script>
</head>
<body>
    <div class="intro"><p>Play!</p></div>
    <KI-GAMES-Invaders></KI-GAMES-Invaders>
    <ki-games-invaders id="second"></ki-games-invaders>
</body>
</html>
"""


class TestMarkup:
    """from_markup() collects element nodes and script requests."""

    def test_nodes_in_document_order(self):
        document = Document.from_markup(PAGE)
        tags = [node.tag_name for node in document.nodes]
        assert tags == ['html', 'head', 'body', 'div', 'p',
                        'ki-games-invaders', 'ki-games-invaders']

    def test_tag_names_lowercased(self):
        document = Document.from_markup(PAGE)
        assert len(document.get_elements_by_tag_name('KI-GAMES-INVADERS')) == 2

    def test_attributes_kept(self):
        document = Document.from_markup(PAGE)
        second = document.get_elements_by_tag_name('ki-games-invaders')[1]
        assert second.attributes == {'id': 'second'}

    def test_star_returns_all(self):
        document = Document.from_markup(PAGE)
        assert len(document.get_elements_by_tag_name('*')) == len(document.nodes)

    def test_scripts_with_src_only(self):
        document = Document.from_markup(PAGE)
        assert [s.src for s in document.scripts] == ['/static/app.js']
        assert document.scripts[0].is_async
        assert document.scripts[0].type == 'text/javascript'

    def test_parsed_scripts_not_fetched(self):
        fetched = []
        Document.from_markup(PAGE, fetch=fetched.append)
        assert fetched == []


class TestScripts:
    """Appending and querying script requests."""

    def test_append_calls_fetch(self):
        fetched = []
        document = Document(fetch=fetched.append)
        request = ScriptRequest(src='games/ki_games_invaders.py')

        document.append_script(request)

        assert fetched == [request]
        assert document.scripts == [request]

    def test_append_without_fetch(self):
        document = Document()
        document.append_script(ScriptRequest(src='games/a.py'))
        assert len(document.scripts) == 1

    def test_query_by_fragment(self):
        document = Document()
        document.append_script(ScriptRequest(src='/cdn/games/ki_games_invaders.py'))
        assert document.query_script('ki_games_invaders.py') is not None
        assert document.query_script('ki_games_pong.py') is None

    def test_request_defaults(self):
        request = ScriptRequest(src='games/a.py')
        assert request.type == 'text/python'
        assert request.is_async
        assert not request.loaded


class TestNodes:
    """Adding and removing nodes."""

    def test_append_node(self):
        document = Document()
        node = document.append_node('KI-Games-Invaders', id='main')
        assert node.tag_name == 'ki-games-invaders'
        assert node.attributes == {'id': 'main'}
        assert not node.is_upgraded

    def test_remove_node(self):
        document = Document()
        node = document.append_node('ki-games-invaders')
        document.remove_node(node)
        document.remove_node(node)
        assert document.nodes == []


class TestEventTarget:
    """DOM-style listener registration."""

    def test_dispatch_by_type(self):
        target = EventTarget()
        downs, ups = [], []
        target.add_event_listener(KEYDOWN, downs.append)
        target.add_event_listener(KEYUP, ups.append)

        event = KeyEvent(KEYDOWN, 'Space')
        target.dispatch_event(event)

        assert downs == [event]
        assert ups == []

    def test_duplicate_listener_registered_once(self):
        target = EventTarget()
        received = []
        target.add_event_listener(KEYDOWN, received.append)
        target.add_event_listener(KEYDOWN, received.append)

        target.dispatch_event(KeyEvent(KEYDOWN, 'Space'))

        assert target.listener_count(KEYDOWN) == 1
        assert len(received) == 1

    def test_remove_listener(self):
        target = EventTarget()
        received = []
        target.add_event_listener(KEYDOWN, received.append)
        target.remove_event_listener(KEYDOWN, received.append)

        target.dispatch_event(KeyEvent(KEYDOWN, 'Space'))

        assert received == []

    def test_remove_unknown_is_noop(self):
        target = EventTarget()
        target.remove_event_listener(KEYDOWN, print)
        assert target.listener_count(KEYDOWN) == 0

    def test_unsubscribe_while_dispatching(self):
        target = EventTarget()
        calls = []

        def first(event):
            calls.append('first')
            target.remove_event_listener(KEYDOWN, second)

        def second(event):
            calls.append('second')

        target.add_event_listener(KEYDOWN, first)
        target.add_event_listener(KEYDOWN, second)
        target.dispatch_event(KeyEvent(KEYDOWN, 'Space'))
        target.dispatch_event(KeyEvent(KEYDOWN, 'Space'))

        assert calls == ['first', 'second', 'first']

    def test_document_is_event_source(self):
        document = Document()
        received = []
        document.add_event_listener(KEYUP, received.append)
        document.dispatch_event(KeyEvent(KEYUP, 'KeyA'))
        assert [e.code for e in received] == ['KeyA']
