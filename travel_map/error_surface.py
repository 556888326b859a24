"""
Single user-visible region for pipeline failures and notices.
"""


class ErrorSurface:
    """
    One message region. Each report replaces the previous message.

    ``sink`` is anything with ``error`` and ``warning`` methods, typically a
    Streamlit ``st.empty()`` placeholder, which also keeps only the last write.
    """

    LEVELS = ('error', 'warning')

    def __init__(self, sink=None):
        self.sink = sink
        self.visible = False
        self.message = None
        self.level = None

    def report(self, message, level='error'):
        if level not in self.LEVELS:
            level = 'error'
        self.visible = True
        self.message = message
        self.level = level
        if self.sink is not None:
            getattr(self.sink, level)(message)

    def clear(self):
        self.visible = False
        self.message = None
        self.level = None
        if self.sink is not None:
            self.sink.empty()
