"""支持 ``python -m lgtmgen`` 调用。"""

from lgtmgen.cli.main import main

if __name__ == "__main__":
    main()
