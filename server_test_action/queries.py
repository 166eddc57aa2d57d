"""GraphQL documents for the Operous operations used by the action."""

CHECK_TOKEN = """
query CheckToken {
  checkToken
}
"""

SERVERS = """
query Servers {
  servers {
    identifier
    name
  }
}
"""

START_TEST_RUN = """
mutation StartTestRun($serverId: String!) {
  startTestRun(serverId: $serverId)
}
"""

SERVER_TEST_RUN = """
query Server($serverId: String!, $testRunId: Int!) {
  server(serverId: $serverId) {
    testRun(testRunId: $testRunId) {
      id
      status
      tests {
        id
        text
        passed
      }
    }
  }
}
"""
