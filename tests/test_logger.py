import unittest

from utils.logger import get_logger


class LoggerTestCase(unittest.TestCase):
    def test_loggers_share_one_console(self):
        first = get_logger("swiftlogi.tests.first")
        second = get_logger("swiftlogi.tests.second")

        self.assertEqual(len(first.handlers), 1)
        self.assertIs(first.handlers[0].console, second.handlers[0].console)

        # asking again does not stack handlers
        self.assertIs(get_logger("swiftlogi.tests.first"), first)
        self.assertEqual(len(first.handlers), 1)


if __name__ == "__main__":
    unittest.main()
