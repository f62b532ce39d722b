class InvalidTestsConfiguration(ValueError):
    pass


class MissingSomeExpectedTableIds(InvalidTestsConfiguration):
    pass


class InvalidSomeExpectedTableIds(InvalidTestsConfiguration):
    pass


class ExternalLinksHaveToBeMarkedFirst(RuntimeError):
    pass
