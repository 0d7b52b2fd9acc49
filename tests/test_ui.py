import logging

from orka_builder.ui import LoggingUi


class TestLoggingUi:

    def test_say_logs_info(self, caplog):
        with caplog.at_level(logging.INFO, logger='orka_builder.ui'):
            LoggingUi('orka').say('Image name is [golden.img]')

        assert caplog.records[-1].levelno == logging.INFO
        assert caplog.records[-1].getMessage() == 'orka: Image name is [golden.img]'

    def test_error_logs_error(self, caplog):
        with caplog.at_level(logging.INFO, logger='orka_builder.ui'):
            LoggingUi().error('Orka API response error [500 Internal Server Error]')

        assert caplog.records[-1].levelno == logging.ERROR
        assert caplog.records[-1].getMessage() == 'Orka API response error [500 Internal Server Error]'
