from enum import Enum
from json import JSONEncoder

jenc = JSONEncoder()



class TestClass(Enum):
    FORMAT = 1
    SYNTAX = 2
    METADATA = 3

    def __str__(self):
        return self.name

    def __lt__(self, other):
        return self.value < other.value



class IncidentType(Enum):
    ERROR = 1

    def __str__(self):
        return self.name

    def __lt__(self, other):
        return self.value < other.value



class Incident:
    """
    Instances of this class describe individual problems found in the input
    while it is being read. Unlike the validator proper, the reader never
    stops on an incident; the incident is only recorded, reported to the
    logger sink and (for errors) it marks the document as erroneous.
    """
    # We can modify the class-level defaults before a batch of similar tests.
    # Then we do not have to repeat the shared parameters for each test.
    default_testclass = TestClass.FORMAT
    default_testid = 'generic-error'
    default_message = 'No error description provided.'
    def __init__(self, state, config, testclass=None, testid=None, message=None, lineno=None, line=None):
        self.state = state
        self.config = config
        # Thematic area to which the incident belongs.
        self.testclass = self.default_testclass if testclass == None else testclass
        # Identifier of the test that lead to the incident. Short string.
        self.testid = self.default_testid if testid == None else testid
        # Verbose description of the problem for the user.
        self.message = self.default_message if message == None else message
        # Line number (1-based). None for document-level incidents and for
        # messages that already carry their own line reference.
        self.lineno = lineno
        # The raw input line the incident refers to, if any.
        self.line = line

    def json(self):
        """
        Returns the incident description in JSON format so it can be passed to
        external applications easily.
        """
        jsonlist = []
        jsonlist.append(f'"type": "{str(self.get_type())}"')
        jsonlist.append(f'"testclass": "{str(self.testclass)}"')
        jsonlist.append(f'"testid": "{str(self.testid)}"')
        jsonlist.append(f'"lineno": {jenc.encode(self.lineno)}')
        jsonlist.append(f'"line": {jenc.encode(self.line)}')
        jsonlist.append(f'"message": {jenc.encode(str(self.message))}')
        return '{' + ', '.join(jsonlist) + '}'

    def _count_me(self):
        self.state.error_counter[self.get_type()][self.testclass] += 1
        # Return 0 if we are not over max_err.
        # Return 1 if we just crossed max_err.
        # Return 2 if we exceeded max_err by more than 1.
        if self.config.get('max_err', 0) > 0 and self.state.error_counter[self.get_type()][self.testclass] > self.config['max_err']:
            if self.state.error_counter[self.get_type()][self.testclass] == self.config['max_err'] + 1:
                return 1
            else:
                return 2
        else:
            return 0

    def _store_me(self):
        # self.state.error_tracker is a list of incidents.
        if self.config.get('max_store', 0) > 0 and len(self.state.error_tracker) >= self.config['max_store']:
            return # we cannot store more incidents
        self.state.error_tracker.append(self)

    def __str__(self):
        if self.lineno is None:
            return self.message
        return f'line {self.lineno}: {self.message} ("{self.line}")'

    def __lt__(self, other):
        return (self.lineno or 0) < (other.lineno or 0)

    def confirm(self):
        """
        Registers the incident: counts it, stores it in the state and, unless
        we should be quiet or we have seen too many incidents of this kind,
        sends its description to the logger sink of the state.
        """
        # Even if we should be quiet, at least count the incident.
        too_many = self._count_me()
        self._store_me()
        if self.config.get('quiet'):
            return
        # Suppress messages of a type of which we have seen too many.
        if too_many > 0:
            if too_many == 1:
                self.state.log(f'...suppressing further messages regarding {str(self.get_type())}/{str(self.testclass)}')
            return # suppressed
        self.state.log(str(self))

    def get_type(self):
        """ This method must be overridden in derived classes. """
        raise NotImplementedError()



class Error(Incident):
    def get_type(self):
        return IncidentType.ERROR
