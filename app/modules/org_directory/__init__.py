"""Organization directory: sync AWS Organizations account metadata into a
queryable cache.

Pipeline: CredentialBroker -> OrgTreeCrawler -> WorkQueueDispatcher -> queue
-> CacheWriter -> DirectoryStore <- QueryService.
"""
