from collections import defaultdict

from udreader.incident import IncidentType
import udreader.utils as utils



class State:
    """
    The State class holds the data about where we are in the input and what
    we have seen so far during one parse. Every call of Document.parse()
    starts with a fresh instance; nothing is carried over between parses.
    """
    def __init__(self, logger=None):
        # Callable that receives one diagnostic string per call.
        self.logger = logger if logger is not None else utils.null_logger
        # True until the first non-comment line of a sentence is seen.
        self.before_sentence = True
        # Elements of the sentence that is being read (already validated and,
        # if needed, repaired).
        self.pending_elements = []
        # Comment lines collected for the next sentence.
        self.pending_comments = []
        # Incident counter by type. Key: incident type, test class; value: incident count
        # Incremented in Incident.confirm(), even if reporting is off or over max_err.
        self.error_counter = defaultdict(lambda: defaultdict(int))
        # List of incidents confirmed so far, up to max_store.
        self.error_tracker = []


    def log(self, message):
        self.logger(message)


    def reset_sentence(self):
        """
        Forgets the pending elements and comments and waits for the next
        sentence.
        """
        self.pending_elements = []
        self.pending_comments = []
        self.before_sentence = True


    def __str__(self):
        # Summarize the errors.
        result = ''
        passed = True
        nerror = 0
        if self.error_counter:
            for k, v in sorted(self.error_counter[IncidentType.ERROR].items()):
                nerror += v
                passed = False
                result += f"{str(k)} errors: {v}\n"
        if passed:
            result += '*** PASSED ***'
        else:
            result += f'*** FAILED *** with {nerror} errors'
        return result


    def passed(self):
        for k, v in self.error_counter[IncidentType.ERROR].items():
            if v > 0:
                return False
        return True


    def __bool__(self):
        return self.passed()
